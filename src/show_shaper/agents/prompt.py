"""
Command Translation Prompt
Fixed system prompt that turns a dashboard edit request into a command list.
"""

from ..core.json import safe_json_dumps
from ..presets import preset_keys
from ..schema.commands import OPS
from ..schema.design import MAX_COMPONENTS

# ============================================================================
# Command contract
# ============================================================================

COMMAND_DOCUMENTATION = """
Output ONLY valid JSON matching { "commands": Command[] }. NO markdown, NO explanations.
Use only whitelisted ops: OP_LIST.

=== PATHS ===
- Shorthand component selector: /components[id=chart1] and /components[id=chart1]/props
- JMESPath rooted at the schema: styles, layout, components[?id=='chart1']

=== COMMANDS ===
- set_style: { "op": "set_style", "path": "styles", "value": { theme?: "light"|"dark", fontScale?: number 0.8-2.0, spacing?: "compact"|"normal"|"spacious", designStyle?: "minimal"|"netflix"|"uber"|"default", cardStyle?: "minimal"|"image-heavy"|"compact" } }
- update: { "op": "update", "path": string, "value": { ...object properties... } }
- add_component: { "op": "add_component", "value": { id: string, type: "table"|"chart"|"kpi"|"card"|"grid", props: {...} } }
- remove_component: { "op": "remove_component", "path": string }
- move_component: { "op": "move_component", "from": string, "to": string, "position": "before"|"after"|"inside" }
- replace_component: { "op": "replace_component", "path": string, "value": { id: string, type: string, props: {...} } }
- apply_preset: { "op": "apply_preset", "value": PRESET_KEY }

=== COMPONENT PROPS ===
- table: { sortBy: "title"|"rating"|"genres"|"premiered", sortDirection?: "asc"|"desc", limit?: number, filterBy?: string, filterValue?: any }
- chart: { kind?: "bar"|"pie", groupBy: "genres"|"months", height?: number, width?: string }
- card: { limit?: number, sortBy?: string, style?: "minimal"|"image-heavy"|"compact", imageSize?: "small"|"medium"|"large", columns?: number, showText?: boolean }
- grid: { columns?: number, gap?: "compact"|"normal"|"spacious", style?: "netflix"|"uber"|"minimal"|"default" }
- kpi: { label?: string }

=== EXAMPLES ===
- "Show top 10 rated": { "op": "update", "path": "/components[id=table1]/props", "value": { "sortBy": "rating", "sortDirection": "desc", "limit": 10 } }
- "Sort by title a-z": { "op": "update", "path": "/components[id=table1]/props", "value": { "sortBy": "title", "sortDirection": "asc" } }
- "Add a pie chart by genre": { "op": "add_component", "value": { "id": "chart2", "type": "chart", "props": { "kind": "pie", "groupBy": "genres" } } }
- "Chart bigger": { "op": "update", "path": "/components[id=chart1]/props", "value": { "height": 400 } }
- "Dark mode": { "op": "set_style", "path": "styles", "value": { "theme": "dark" } }
"""


def get_system_prompt() -> str:
    """Build the system prompt with the current preset catalog and limits."""
    keys = preset_keys()
    key_union = "|".join(f'"{key}"' for key in keys)
    preset_rules = "\n".join(
        f'- "Make it look like {key}" or "{key} style": FIRST emit {{ "op": "apply_preset", "value": "{key}" }}'
        for key in keys
    )
    return (
        "You translate natural language design requests into a strict JSON command list "
        "that mutates a dashboard UI schema.\n"
        + COMMAND_DOCUMENTATION.replace("OP_LIST", ", ".join(OPS)).replace("PRESET_KEY", key_union)
        + "\n=== PRESETS (use FIRST when the user asks for brand styling) ===\n"
        + preset_rules
        + "\n- After a preset you may add follow-up commands such as move_component or update.\n"
        + f"\nPrefer concise changes; never exceed {MAX_COMPONENTS} components in total.\n"
        + 'CRITICAL: "value" must be a JSON object for every op except apply_preset, where it is the preset key string.\n'
    )


def build_user_message(prompt: str, schema: dict) -> str:
    """Second turn: the current schema and the user's request."""
    return safe_json_dumps({"schema": schema, "prompt": prompt})


SYSTEM_PROMPT = get_system_prompt()
