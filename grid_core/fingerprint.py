import hashlib
from pathlib import Path


def digest(data: bytes) -> str:
    """
    Returns the lowercase hex MD5 of the given bytes.
    Must stay MD5: the published grid_hashes.txt is generated with it.
    """
    return hashlib.md5(data).hexdigest()


def digest_file(file_path: Path) -> str:
    with open(file_path, "rb") as f:
        return digest(f.read())
