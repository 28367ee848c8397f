"""Markdown helpers — rendering a vault export as a readable document."""

from __future__ import annotations

import jinja2

from promptvault.schemas.transfer import ExportDocument

_EXPORT_TEMPLATE = """\
# PromptVault Export

> Exported on {{ exported_on }}

---

{% for prompt in prompts %}
## {{ prompt.title }}

{% if prompt.description %}
*{{ prompt.description }}*

{% endif %}
{% if prompt.tags %}
**Tags:** {{ prompt.tags | join(", ") }}

{% endif %}
```
{{ prompt.content }}
```

---

{% endfor %}
"""

# Prompt bodies contain "{{name}}" tokens; they are passed in as values,
# never compiled, so Jinja leaves them alone.
_env = jinja2.Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
)


def build_export_md(document: ExportDocument) -> str:
    """Render an export document as Markdown, one section per prompt."""
    tpl = _env.from_string(_EXPORT_TEMPLATE)
    return tpl.render(
        exported_on=document.exported_at.strftime("%Y-%m-%d"),
        prompts=document.prompts,
    )
