"""Display outputs, arrangement canvas geometry, settings page state and randr command building."""

__version__ = "0.1.0"

__all__ = ["geometry", "randr", "tabs", "arrangement", "commands", "page"]