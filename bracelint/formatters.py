#!/usr/bin/env python3
"""Text rendering of lint results using Jinja2.

Example:
    >>> print(string_formatter([result]))
    styles.css
      index 17  error  Expected empty line before closing brace (block-closing-brace-empty-line-before)

    1 problem
"""

from typing import Iterable, Optional

import jinja2

from bracelint.rules.engine import LintResult

STRING_TEMPLATE = """\
{% for result in results if result.warnings %}
{{ result.source or "<input>" }}
{% for warning in result.warnings %}
  index {{ warning.index if warning.index is not none else "-" }}  {{ warning.severity }}  {{ warning.text }}
{% endfor %}

{% endfor %}
{{ total }} problem{{ "s" if total != 1 else "" }}
"""

_environment: Optional[jinja2.Environment] = None


def _get_environment() -> jinja2.Environment:
    global _environment
    if _environment is None:
        _environment = jinja2.Environment(trim_blocks=True, autoescape=False)
    return _environment


def string_formatter(results: Iterable[LintResult], template: str = STRING_TEMPLATE) -> str:
    """Render warnings grouped by source.

    Args:
        results: Lint results to render
        template: Jinja2 template source

    Returns:
        Rendered report, or "" if there are no warnings
    """
    results = list(results)
    total = sum(len(result.warnings) for result in results)
    if total == 0:
        return ""

    rendered = _get_environment().from_string(template).render(results=results, total=total)
    return rendered.rstrip("\n") + "\n"
