import os
import json
from loguru import logger
from typing import Any, Dict


def load_json(file_name: str) -> Dict[str, Any]:
    """
    Load a JSON document from file.

    Args:
        file_name: Path of the JSON file.

    Returns:
        Parsed document.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not os.path.exists(file_name):
        raise FileNotFoundError(f"JSON file not found: {file_name}")

    with open(file_name, 'r', encoding='utf-8') as f:
        data = json.load(f)

    logger.debug(f"Loaded {file_name}")
    return data


def save_json(data: Dict[str, Any], file_name: str) -> bool:
    """
    Save a JSON document, creating the parent directory when needed.

    Args:
        data: Document to save.
        file_name: Output JSON file path.

    Returns:
        True on success, raises otherwise.
    """
    try:
        dir_path = os.path.dirname(file_name)
        if dir_path and not os.path.exists(dir_path):
            os.makedirs(dir_path)

        with open(file_name, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=4)

        logger.info(f"Data successfully saved to {file_name}")
        return True
    except Exception as e:
        logger.error(f"Error saving to {file_name}: {e}")
        raise
