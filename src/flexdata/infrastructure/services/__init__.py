"""Infrastructure services."""

from flexdata.infrastructure.services.prompt_renderer import (
    PromptRenderer,
    get_prompt_renderer,
)

__all__ = ["PromptRenderer", "get_prompt_renderer"]
