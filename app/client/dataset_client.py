from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

DEFAULT_TIMEOUT = 15.0


@dataclass(frozen=True)
class DatasetClient:
    base_url: str
    correlation_id: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def headers(self) -> Dict[str, str]:
        if not self.correlation_id:
            return {}
        return {"CORRELATIONID": self.correlation_id}

    def list_datasets(self) -> List[Dict[str, Any]]:
        r = requests.get(f"{self.base_url}/api/mlDataset", headers=self.headers, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_dataset(self, dataset_id: int) -> Optional[Dict[str, Any]]:
        """Returns None when the service answers 404."""
        r = requests.get(
            f"{self.base_url}/api/mlDataset/{int(dataset_id)}",
            headers=self.headers,
            timeout=self.timeout,
        )
        if r.status_code == 404:
            return None
        r.raise_for_status()
        return r.json()

    def health(self) -> Dict[str, Any]:
        # 503 still carries {"status": "unhealthy", "error": ...}
        r = requests.get(f"{self.base_url}/api/healthz", headers=self.headers, timeout=self.timeout)
        if r.status_code not in (200, 503):
            r.raise_for_status()
        return r.json()


def from_env() -> DatasetClient:
    base_url = os.environ.get("BASE_URL", "http://127.0.0.1:8081").rstrip("/")
    return DatasetClient(base_url=base_url, correlation_id=os.environ.get("CORRELATIONID"))
