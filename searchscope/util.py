from typing import List, Optional


def is_relative_to_base_directory(file_path: str) -> bool:
    # checks if a path is written relative to the base directory, e.g. './src'.
    normalized_path = file_path.replace("\\", "/")
    return normalized_path.startswith("./")

def push_if_not_included(container: Optional[List[str]], item: str) -> List[str]:
    """
    Appends `item` to `container` only if it is not already there.
    A missing container is replaced by a new single-item list, so callers
    must use the returned list.
    """
    if container is None:
        return [item]

    if item not in container:
        container.append(item)

    return container
