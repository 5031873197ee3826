"""Configuration models.

A *context* binds a task database to the owner id whose tasks the CLI
operates on, so several owners can share one database file and a single
user can switch between vaults.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .core import MAX_PAGE_SIZE


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class UIConfig(BaseModel):
    """UI configuration."""

    page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)


class Context(BaseModel):
    """Context configuration for a task database and owner."""

    name: str = Field(..., description="Unique context name")
    source: str = Field(..., description="SQLite database path")
    owner_id: str = Field(..., description="Owner whose tasks are managed")
    description: str = Field(default="", description="Human-readable description")

    @field_validator("source", "owner_id")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("value cannot be empty")
        return v.strip()


class AppConfig(BaseModel):
    """Main todolist configuration"""

    current_context_name: str = Field(
        default="default", description="Active context name"
    )
    contexts: list[Context] = Field(
        default_factory=list, description="Available contexts"
    )

    output: OutputConfig = Field(default_factory=OutputConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    def get_context(self, name: str) -> Context:
        """Get context by name."""
        for ctx in self.contexts:
            if ctx.name == name:
                return ctx
        raise ValueError(f"Context '{name}' not found")

    def get_current_context(self) -> Context:
        """Get the currently active context."""
        return self.get_context(self.current_context_name)

    def add_context(self, context: Context):
        """Add a new context.

        Raises:
            ValueError: If context with the same name already exists
        """
        if any(ctx.name == context.name for ctx in self.contexts):
            raise ValueError(
                f"Context '{context.name}' already exists."
                " Use a different name or remove the existing context first."
            )
        self.contexts.append(context)

    def remove_context(self, name: str):
        """Remove a context by name."""
        if name == self.current_context_name:
            raise ValueError(f"Cannot remove the active context '{name}'")
        original_len = len(self.contexts)
        self.contexts = [ctx for ctx in self.contexts if ctx.name != name]
        if len(self.contexts) == original_len:
            raise ValueError(f"Context '{name}' not found")
        return True
