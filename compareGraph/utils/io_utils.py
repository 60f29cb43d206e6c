import os
import json
from loguru import logger
from typing import List, Dict, Any, Union


def save_json(data: Union[Dict[str, Any], List[Any]], output_path: str) -> bool:
    """
    Save data as an indented JSON file, creating parent directories.

    Args:
        data: Dictionary or list to save
        output_path: Output file path

    Returns:
        True on success, raises on failure
    """
    try:
        dir_path = os.path.dirname(output_path)
        if dir_path and not os.path.exists(dir_path):
            os.makedirs(dir_path)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info(f"Data successfully saved to {output_path}")
        return True
    except Exception as e:
        logger.error(f"Error saving to {output_path}: {e}")
        raise


def load_json(input_path: str) -> Union[Dict[str, Any], List[Any]]:
    """Load a JSON file."""
    with open(input_path, 'r', encoding='utf-8') as f:
        return json.load(f)
