"""create-mono-init -- interactive pnpm monorepo generator."""

__version__ = "0.1.0"
