"""
Result stores keeping exactly one live CalculationResult per component.

Every write replaces the full result set of an inspection in one step, so a
failed or concurrent run never leaves a partially populated component set.
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict

from vessel_integrity.analysis.aggregation import results_from_dataframe, results_to_dataframe
from vessel_integrity.app.s3_utils import get_s3_client, load_csv_from_s3, save_csv_to_s3
from vessel_integrity.config import S3_BUCKET_NAME
from vessel_integrity.core.models import CalculationResult, ComponentId

logger = logging.getLogger(__name__)


class ResultStore(ABC):
    """Interface: atomic replace-set of calculation results per inspection."""

    @abstractmethod
    def replace_results(self, inspection_id, results: Dict[ComponentId, CalculationResult]) -> None:
        ...

    @abstractmethod
    def get_results(self, inspection_id) -> Dict[ComponentId, CalculationResult]:
        ...


class InMemoryResultStore(ResultStore):
    """Process-local store; the lock makes each replace a single swap."""

    def __init__(self):
        self._results: Dict[str, Dict[ComponentId, CalculationResult]] = {}
        self._lock = threading.Lock()

    def replace_results(self, inspection_id, results):
        snapshot = dict(results)
        with self._lock:
            self._results[str(inspection_id)] = snapshot
        logger.debug(f"Stored {len(snapshot)} results for inspection {inspection_id}")

    def get_results(self, inspection_id):
        with self._lock:
            return dict(self._results.get(str(inspection_id), {}))


class S3ResultStore(ResultStore):
    """
    Stores each inspection's results as one CSV object:
    <bucket>/<prefix><inspection_id>/calculations.csv
    """

    def __init__(self, bucket_name=None, prefix="inspections/", s3_client=None):
        self.bucket_name = bucket_name or S3_BUCKET_NAME
        if not self.bucket_name:
            raise ValueError("No S3 bucket configured. Set VESSEL_INTEGRITY_S3_BUCKET.")
        self.prefix = prefix
        self.s3_client = s3_client or get_s3_client()

    def _key(self, inspection_id) -> str:
        return f"{self.prefix}{inspection_id}/calculations.csv"

    def replace_results(self, inspection_id, results):
        save_csv_to_s3(results_to_dataframe(results), self.bucket_name, self._key(inspection_id),
                       s3_client=self.s3_client)
        logger.info(f"Wrote {len(results)} results to s3://{self.bucket_name}/{self._key(inspection_id)}")

    def get_results(self, inspection_id):
        df = load_csv_from_s3(self.bucket_name, self._key(inspection_id), s3_client=self.s3_client)
        if df is None:
            return {}
        return results_from_dataframe(df)
