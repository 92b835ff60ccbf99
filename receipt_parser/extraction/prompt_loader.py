from pathlib import Path

from receipt_parser.extraction.exceptions import PromptTemplateError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(name: str, path: Path | None = None) -> str:
    """Load a prompt template from a file.

    Args:
        name: Bundled template file name, used when ``path`` is not given
              (``ocr_prompt.txt`` or ``structuring_prompt.txt``).
        path: Explicit path to a custom template file.

    Returns:
        The raw template string with placeholders.

    Raises:
        PromptTemplateError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptTemplateError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the expense JSON schema from a file.

    Args:
        path: Path to the JSON schema file.
              Defaults to the bundled expense_schema.json.

    Raises:
        PromptTemplateError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "expense_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptTemplateError(f"Failed to load JSON schema: {exc}") from exc
