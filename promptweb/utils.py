import json
import re


def clean_json_response(response: str):
    """
    Extracts and parses JSON from an LLM response.
    Handles markdown code blocks (```json ... ```) and raw JSON.
    Returns parsed object (dict or list) or None if parsing fails.
    """
    if not response:
        return None

    text = response.strip()

    # Match ```json ... ``` or ``` ... ```
    match = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
    if match:
        text = match.group(1)

    # Trim conversational text around the outermost object or list
    first_brace = text.find('{')
    first_bracket = text.find('[')

    start_idx = -1
    end_idx = -1
    if first_brace != -1 and (first_bracket == -1 or first_brace < first_bracket):
        start_idx = first_brace
        end_idx = text.rfind('}')
    elif first_bracket != -1:
        start_idx = first_bracket
        end_idx = text.rfind(']')

    if start_idx != -1 and end_idx != -1:
        text = text[start_idx:end_idx + 1]

    try:
        return json.loads(text, strict=False)
    except json.JSONDecodeError:
        return None

