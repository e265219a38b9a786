"""Scaffold a TypeScript npm package and release it with npm and git."""
