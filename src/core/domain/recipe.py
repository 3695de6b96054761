"""Recipes exposed by the task runner.

This module centralizes the recipe names supported across the application.
Keeping it in the domain layer lets both the CLI listing and the services
share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class Recipe(str, Enum):
    """Named recipes, in the order they are listed."""

    BUILD = "build"
    DEV = "dev"
    ZOLA_DEV = "zola-dev"
    TAILWIND_DEV = "tailwind-dev"
    DEPLOY = "deploy"

    @classmethod
    def default(cls) -> "Recipe":
        return cls.BUILD

    def description(self) -> str:
        """One-line summary shown by `blog list`."""

        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[Recipe, str] = {
    Recipe.BUILD: "Compile the stylesheet, render the site and package the output",
    Recipe.DEV: "Run the site dev server and the stylesheet watcher together",
    Recipe.ZOLA_DEV: "Run the site dev server only",
    Recipe.TAILWIND_DEV: "Watch and recompile the stylesheet only",
    Recipe.DEPLOY: "Build, then force-push the packaged output to an orphan branch",
}
