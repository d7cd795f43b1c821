"""
Raw record normalizers for the posture datasets.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from pydantic import BaseModel, Field, ValidationError

from posture_sentinel.access.models import (
    Account,
    InactiveAccountSummary,
    PrivilegedAccountSummary,
    RevocationEvent,
)
from posture_sentinel.assets.models import (
    AntivirusRecord,
    AntivirusStatus,
    Asset,
    Criticality,
    EndpointProtectionRecord,
    MfaStatus,
    MfaUserRecord,
)
from posture_sentinel.core.errors import MalformedRecordError

logger = logging.getLogger(__name__)

# Source field name -> model field name
FIELD_ALIASES: Dict[str, Dict[str, str]] = {
    "assets": {
        "encryption": "encrypted",
        "os": "operating_system",
        "operatingSystem": "operating_system",
    },
    "endpoint_protection": {
        "edr_installed": "installed",
    },
    "antivirus": {},
    "mfa": {
        "status": "mfa_status",
        "mfaStatus": "mfa_status",
    },
    "accounts": {
        "isLeastPrivilege": "is_least_privilege",
        "isGeneric": "is_generic",
    },
    "inactive_accounts": {
        "total_inactive_accounts": "total_inactive",
        "removed_accounts": "removed_inactive",
        "totalInactive": "total_inactive",
        "removedInactive": "removed_inactive",
    },
    "privileged_accounts": {
        "total_privileged_accounts": "total_privileged",
        "reviewed_accounts": "reviewed_privileged",
        "totalPrivileged": "total_privileged",
        "reviewedPrivileged": "reviewed_privileged",
    },
    "revocations": {
        "revocationTimeHours": "revocation_time_hours",
    },
}

# Source label -> model value, for labels that differ from the enum values
LABEL_ALIASES: Dict[str, Dict[str, str]] = {
    "criticality": {
        "Critique": Criticality.CRITICAL.value,
    },
    "mfa_status": {
        "activé": MfaStatus.ENABLED.value,
        "désactivé": MfaStatus.DISABLED.value,
        "Enabled": MfaStatus.ENABLED.value,
        "Disabled": MfaStatus.DISABLED.value,
    },
}

RECORD_MODELS: Dict[str, Type[BaseModel]] = {
    "assets": Asset,
    "endpoint_protection": EndpointProtectionRecord,
    "antivirus": AntivirusRecord,
    "mfa": MfaUserRecord,
    "accounts": Account,
    "revocations": RevocationEvent,
}

SUMMARY_MODELS: Dict[str, Type[BaseModel]] = {
    "inactive_accounts": InactiveAccountSummary,
    "privileged_accounts": PrivilegedAccountSummary,
}

# Datasets whose records may arrive as bare status lines
STATUS_FIELDS: Dict[str, Tuple[str, Sequence[str]]] = {
    "antivirus": ("status", [s.value for s in AntivirusStatus]),
    "mfa": (
        "mfa_status",
        [s.value for s in MfaStatus] + list(LABEL_ALIASES["mfa_status"]),
    ),
}

_LINE_SEPARATORS = re.compile(r"[,;|\s]+")


class NormalizationResult(BaseModel):
    """Typed records of one dataset plus the skipped record count."""

    dataset: str
    records: List[Any] = Field(default_factory=list)
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)


class RecordNormalizer:
    """
    Normalizes raw records into posture entities.

    Malformed records are skipped and counted; they never abort a dataset.
    """

    def normalize_dataset(self, dataset: str, raw_records: Optional[Sequence[Any]]) -> NormalizationResult:
        """
        Normalize every record of a list dataset.

        Args:
            dataset: Dataset name (assets, antivirus, accounts, ...)
            raw_records: Raw dicts or status lines; None counts as empty

        Returns:
            NormalizationResult with the valid records and skip count
        """
        if dataset not in RECORD_MODELS:
            raise ValueError(f"Unknown list dataset: {dataset}")

        result = NormalizationResult(dataset=dataset)
        if raw_records is None:
            return result
        if isinstance(raw_records, Mapping) or isinstance(raw_records, (str, bytes)):
            # A lone object or line is treated as a single record
            raw_records = [raw_records]
        if not isinstance(raw_records, (list, tuple)):
            error = MalformedRecordError(
                dataset, 0, f"expected a list of records, got {type(raw_records).__name__}"
            )
            logger.warning(f"Skipped malformed dataset payload: {error}")
            result.skipped = 1
            result.errors.append(str(error))
            return result

        for index, raw in enumerate(raw_records):
            try:
                result.records.append(self.normalize_record(dataset, raw, index))
            except MalformedRecordError as e:
                result.skipped += 1
                result.errors.append(str(e))

        if result.skipped:
            logger.warning(
                f"Skipped {result.skipped} malformed record(s) in {dataset} "
                f"({len(result.records)} kept)"
            )
        return result

    def normalize_record(self, dataset: str, raw: Any, index: int = 0) -> BaseModel:
        """
        Normalize a single record.

        Raises:
            MalformedRecordError: If a required field is missing or a value
                is outside its domain
        """
        if isinstance(raw, str):
            raw = self._parse_status_line(dataset, raw, index)
        if not isinstance(raw, Mapping):
            raise MalformedRecordError(dataset, index, f"unsupported record type {type(raw).__name__}")

        fields = self._rename_fields(dataset, raw)
        return self._build(RECORD_MODELS[dataset], dataset, fields, index)

    def normalize_summary(self, dataset: str, raw: Optional[Any]) -> Tuple[BaseModel, int]:
        """
        Normalize an aggregate counter dataset (inactive or privileged accounts).

        A missing summary becomes all-zero counters. A malformed summary is
        replaced by all-zero counters and reported as one skipped record.

        Returns:
            (summary, skipped) tuple
        """
        model = SUMMARY_MODELS.get(dataset)
        if model is None:
            raise ValueError(f"Unknown summary dataset: {dataset}")

        if raw is None:
            return model(), 0
        # Single-row CSV or list payloads carry the summary as their only item
        if isinstance(raw, list) and len(raw) == 1:
            raw = raw[0]

        try:
            if not isinstance(raw, Mapping):
                raise MalformedRecordError(dataset, 0, "summary must be an object")
            return self._build(model, dataset, self._rename_fields(dataset, raw), 0), 0
        except MalformedRecordError as e:
            logger.warning(f"Malformed summary replaced by zero counters: {e}")
            return model(), 1

    def _rename_fields(self, dataset: str, raw: Mapping) -> Dict[str, Any]:
        aliases = FIELD_ALIASES.get(dataset, {})
        fields: Dict[str, Any] = {}
        for key, value in raw.items():
            name = aliases.get(key, key)
            if isinstance(value, str):
                value = value.strip()
                value = LABEL_ALIASES.get(name, {}).get(value, value)
            elif name == "id" and isinstance(value, int) and not isinstance(value, bool):
                value = str(value)
            # Canonical names win over aliases when both are present
            if name in fields and key != name:
                continue
            fields[name] = value
        return fields

    def _parse_status_line(self, dataset: str, line: str, index: int) -> Dict[str, Any]:
        """
        Parse a delimited text line of a status dataset.

        The first token that is a known status label is used.
        """
        if dataset not in STATUS_FIELDS:
            raise MalformedRecordError(dataset, index, "text lines are not supported for this dataset")

        field, labels = STATUS_FIELDS[dataset]
        for token in _LINE_SEPARATORS.split(line):
            token = token.strip()
            if token in labels:
                return {field: token}
        raise MalformedRecordError(dataset, index, f"no status label in line {line!r}")

    def _build(self, model: Type[BaseModel], dataset: str, fields: Dict[str, Any], index: int) -> BaseModel:
        try:
            return model(**fields)
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
                for err in e.errors()
            )
            raise MalformedRecordError(dataset, index, reasons) from e

