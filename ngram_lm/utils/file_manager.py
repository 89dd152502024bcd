import os
import json
from pathlib import Path


def get_project_root(marker="ngram_lm"):
    """
    Finds the project root by looking for the 'marker' folder.
    Walks up the parents until it is found.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / marker).exists():
            return parent
    raise FileNotFoundError(f"Project root not found. Couldn't locate folder '{marker}'")


def get_model_path(root, category, subdir=None, final=False):
    """
    Create and return a standardized path for experiment assets.

    Args:
        root (str): Root folder of the project.
        category (str): Asset type (e.g., "models").
        subdir (str, optional): Subfolder for a specific model family.
        final (bool): If True, use "saved_models" instead of "experiments".

    Returns:
        Path: Full path to the folder (created if missing).
    """
    if root is None:
        root = get_project_root()
    root = Path(root)
    base_folder = "experiments" if not final else "saved_models"
    exp_path = root / base_folder / category
    if subdir:
        exp_path = exp_path / subdir
    exp_path.mkdir(parents=True, exist_ok=True)
    return exp_path


def write_json(path, data):
    """
    Serialize `data` as UTF-8 JSON at `path`, creating parent folders.

    Returns:
        Path: the written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
    return path


def read_json(path):
    """
    Load a UTF-8 JSON document.

    Raises:
        FileNotFoundError: If file does not exist.
        ValueError: If the content is not valid JSON.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found in: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def save_item(item, folder, filename):
    """
    Save a JSON-serializable item under folder/filename.

    Returns:
        str: Full path to the saved file.
    """
    if not filename.endswith(".json"):
        raise ValueError(f"Unsupported file extension for '{filename}' (use .json)")
    file_path = os.path.join(folder, filename)
    write_json(file_path, item)
    return file_path


def load_item(folder, filename):
    """
    Load an item previously written with save_item.

    Raises:
        FileNotFoundError: If file does not exist.
    """
    if not filename.endswith(".json"):
        raise ValueError(f"Unsupported file extension for '{filename}' (use .json)")
    return read_json(os.path.join(folder, filename))
