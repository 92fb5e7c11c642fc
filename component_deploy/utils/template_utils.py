"""Template processing utilities"""

import string
from typing import Any, Dict, List


def render_template(template: str,
                    variables: Dict[str, Any],
                    safe: bool = True) -> str:
    """
    Render ${var} template with variables

    Args:
        template: Template string
        variables: Variables to substitute
        safe: Use safe substitution (leave missing vars untouched)

    Returns:
        Rendered string
    """
    context = {key: str(value) for key, value in variables.items()}
    tmpl = string.Template(template)

    if safe:
        return tmpl.safe_substitute(context)
    else:
        return tmpl.substitute(context)


def render_command(args: List[str], variables: Dict[str, Any]) -> List[str]:
    """Render every argument of a command template"""
    return [render_template(arg, variables) for arg in args]


def render_tokens(template: str, tokens: Dict[str, str]) -> str:
    """
    Replace {TOKEN} placeholders (mail subject style)

    Unknown tokens are left as they are.
    """
    result = template
    for key, value in tokens.items():
        result = result.replace("{" + key + "}", value)
    return result
