"""NativeWind (Tailwind for React Native) setup for the Expo app.

Applied after the Expo project exists, whether it came from
``create-expo-app`` or from the bundled ``app`` template.  Dependencies are
only added when absent so a generator's own pins win; config files come from
the ``nativewind`` template tree and are replaced outright.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from .errors import ManifestReadWriteFailure
from .templates import TemplateRenderer
from .workspace import merge_absent, read_manifest, write_manifest

GLOBAL_CSS_IMPORT = 'import "./global.css";'

# Versions from the NativeWind Expo installation guide.
NATIVEWIND_DEPENDENCIES: dict[str, str] = {
    "nativewind": "^4.0.0",
    "react-native-reanimated": "~3.17.4",
    "react-native-safe-area-context": "5.4.0",
}
NATIVEWIND_DEV_DEPENDENCIES: dict[str, str] = {
    "tailwindcss": "^3.4.17",
}


async def setup_nativewind(
    app_dir: str | Path,
    renderer: TemplateRenderer,
    context: dict[str, Any],
) -> None:
    """Wire NativeWind into the Expo project at *app_dir*.

    Steps:
        1. Add NativeWind dependencies and a ``dev`` script to
           ``package.json`` (only where absent).
        2. Materialize the ``nativewind`` tree (Tailwind, Babel, Metro
           config, ``global.css``, className typings).
        3. Switch ``app.json``'s web bundler to Metro.
        4. Import ``global.css`` from ``App.tsx``.

    Running it twice leaves the project unchanged the second time.
    """
    root = Path(app_dir)
    await asyncio.to_thread(
        merge_absent,
        root / "package.json",
        {
            "scripts": {"dev": "expo start"},
            "dependencies": dict(NATIVEWIND_DEPENDENCIES),
            "devDependencies": dict(NATIVEWIND_DEV_DEPENDENCIES),
        },
    )
    await renderer.materialize("nativewind", root, context)
    await asyncio.to_thread(_use_metro_web_bundler, root / "app.json")
    await asyncio.to_thread(_import_global_css, root / "App.tsx")


def _use_metro_web_bundler(app_json: Path) -> None:
    if not app_json.exists():
        return
    data = read_manifest(app_json)
    expo = data.setdefault("expo", {})
    if not isinstance(expo, dict):
        raise ManifestReadWriteFailure(app_json, '"expo" is not an object')
    web = expo.setdefault("web", {})
    if not isinstance(web, dict):
        raise ManifestReadWriteFailure(app_json, '"expo.web" is not an object')
    web["bundler"] = "metro"
    write_manifest(app_json, data)


def _import_global_css(app_tsx: Path) -> None:
    if not app_tsx.exists():
        return
    source = app_tsx.read_text(encoding="utf-8")
    if 'import "./global.css"' in source:
        return
    app_tsx.write_text(f"{GLOBAL_CSS_IMPORT}\n{source}", encoding="utf-8")
