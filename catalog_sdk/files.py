# catalog_sdk/files.py
import logging
from pathlib import Path
from typing import Optional, Dict, Any, List, Union

import requests

logger = logging.getLogger(__name__)


class FileClient:
    """Upload/download panel transport. Blocking; run it off the event loop."""

    def __init__(self, base_url: str = "http://localhost:3001", timeout: float = 10.0, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def close(self):
        self.session.close()

    def upload(self, path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(path)
        with open(path, "rb") as fh:
            r = self.session.post(
                f"{self.base_url}/api/upload",
                files={"file": (path.name, fh)},
                timeout=self.timeout,
            )
        r.raise_for_status()
        logger.info("Uploaded %s", path.name)
        return r.json()

    def list_files(self) -> List[str]:
        r = self.session.get(f"{self.base_url}/api/files", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def download(self, filename: str, dest_dir: Union[str, Path] = ".") -> Path:
        r = self.session.get(f"{self.base_url}/api/download/{filename}", timeout=self.timeout)
        r.raise_for_status()

        name = _filename_from_disposition(r.headers.get("content-disposition")) or filename
        dest_dir = Path(dest_dir)
        dest_dir.mkdir(parents=True, exist_ok=True)
        target = dest_dir / Path(name).name
        target.write_bytes(r.content)
        logger.info("Downloaded %s to %s", filename, target)
        return target


def _filename_from_disposition(value: Optional[str]) -> Optional[str]:
    if not value or "filename=" not in value:
        return None
    return value.split("filename=", 1)[1].split(";", 1)[0].strip().strip('"') or None
