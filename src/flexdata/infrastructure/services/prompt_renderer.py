"""Jinja2 renderer for the collection integration prompt.

The prompt is plain text meant to be pasted into an assistant together with
a site's source code. It lists the read proxy URL and how each field label
maps to the internal key used in the returned data objects.
"""

from collections.abc import Sequence

from jinja2 import StrictUndefined, TemplateSyntaxError, UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from flexdata.core.logging import get_logger
from flexdata.domain.entities import Collection, Field

logger = get_logger(__name__)

INTEGRATION_PROMPT_TEMPLATE = """\
I am using FlexData, a headless CMS, for my project.
Please help me connect my existing code to my FlexData collection.

### PROJECT
- Project ID: {{ project_id }}
- Read API URL: {{ proxy_url }}

### SCHEMA
- Collection: "{{ collection.name }}" (ID: {{ collection.id }})
- Field mapping (label -> internal key):
{% for field in fields %}
  * "{{ field.display_label }}": item["{{ field.name }}"] ({{ field.type }})
{% else %}
  * (no fields yet)
{% endfor %}

### RESPONSE FORMAT
GET {{ proxy_url }} returns {"count": <number>, "results": [...]}.
Each entry of "results" is one data object. Read values with the internal
keys above, never with the labels.

### TASK
1. Find hardcoded text, images and audio links in the code below.
2. Replace them with values fetched from "{{ collection.name }}".
3. Use the internal keys (e.g. item["{{ example_key }}"]), not the labels.

---
PASTE YOUR CODE BELOW THIS LINE:
"""


class PromptRenderer:
    """Render the integration prompt in a sandboxed Jinja2 environment."""

    def __init__(self, template_string: str = INTEGRATION_PROMPT_TEMPLATE) -> None:
        self.env = SandboxedEnvironment(
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.template_string = template_string

    def render(
        self,
        external_url: str,
        api_prefix: str,
        collection: Collection,
        fields: Sequence[Field],
    ) -> str:
        """Render the prompt for one collection.

        Args:
            external_url: Public base URL of the server.
            api_prefix: Prefix of the public read proxy.
            collection: The collection being integrated.
            fields: Its fields in display order.

        Returns:
            The prompt text.
        """
        proxy_url = f"{external_url.rstrip('/')}{api_prefix}/{collection.project_id}/{collection.id}"
        variables = {
            "project_id": collection.project_id,
            "proxy_url": proxy_url,
            "collection": collection,
            "fields": list(fields),
            "example_key": fields[0].name if fields else "fld_xxxxxxxx",
        }
        try:
            rendered = self.env.from_string(self.template_string).render(**variables)
        except TemplateSyntaxError as e:
            logger.error("Template syntax error", error=str(e), line=e.lineno)
            raise
        except UndefinedError as e:
            logger.error("Undefined variable in template", error=str(e))
            raise
        logger.debug("Integration prompt rendered", collection_id=collection.id)
        return rendered


_prompt_renderer: PromptRenderer | None = None


def get_prompt_renderer() -> PromptRenderer:
    """Get the global prompt renderer instance."""
    global _prompt_renderer
    if _prompt_renderer is None:
        _prompt_renderer = PromptRenderer()
    return _prompt_renderer
