import json
import yaml
from typing import List, Union
from pathlib import Path
from pydantic import ValidationError
from taskforest.recovery import FileOperationError, CorruptionError
from taskforest.models import Task, TaskCollection
from taskforest.logs import get_logger

log = get_logger("io")

YAML_SUFFIXES = ('.yml', '.yaml')
JSON_SUFFIXES = ('.json',)

def _parse(file_path: Path, text: str):
    if file_path.suffix.lower() in JSON_SUFFIXES:
        return json.loads(text)
    return yaml.safe_load(text)

def load_tasks(file_path: Union[Path, str]) -> List[Task]:
    """
    Load a flat task collection from a YAML or JSON snapshot.

    The document is either a list of task mappings or a mapping with a
    ``tasks`` list. Files are only ever read.

    Args:
        file_path: Path to the snapshot file

    Returns:
        The tasks in file order

    Raises:
        FileOperationError: If the file is missing or cannot be read
        CorruptionError: If the file cannot be parsed or a task is invalid
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileOperationError(f"Task file not found: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = _parse(file_path, f.read())

    except json.JSONDecodeError as e:
        raise CorruptionError(f"JSON syntax error in {file_path}: {e}") from e
    except yaml.YAMLError as e:
        raise CorruptionError(f"YAML syntax error in {file_path}: {e}") from e
    except (IOError, OSError) as e:
        # I/O errors are recoverable
        raise FileOperationError(f"Failed to read file {file_path}: {e}") from e

    if data is None:
        data = []
    if isinstance(data, list):
        data = {'tasks': data}
    if not isinstance(data, dict) or 'tasks' not in data:
        raise CorruptionError(f"File {file_path} contains invalid data structure")

    try:
        collection = TaskCollection.model_validate(data)
    except ValidationError as e:
        raise CorruptionError(f"Invalid task data in {file_path}: {e}") from e

    log.debug(f"Loaded {len(collection.tasks)} tasks from {file_path}")
    return collection.tasks
