"""Display labels resolved against the snapshot taxonomy."""

from cockpit.contracts.schema import Snapshot, StaffingEntry
from cockpit.contracts.settings import TaxonomyEntry


def _name(entries: list[TaxonomyEntry], entry_id: str, unknown: str) -> str:
    match = next((e for e in entries if e.id == entry_id), None)
    if match:
        return match.name
    return entry_id or unknown


def unit_name(snapshot: Snapshot, unit_id: str) -> str:
    return _name(snapshot.settings.taxonomy.units, unit_id, "Unknown Unit")


def lifecycle_name(snapshot: Snapshot, lifecycle_id: str) -> str:
    return _name(snapshot.settings.taxonomy.lifecycle, lifecycle_id, "Unknown Phase")


def type_name(snapshot: Snapshot, type_id: str) -> str:
    return _name(snapshot.settings.taxonomy.work_types, type_id, "Unknown Type")


def staff_label(snapshot: Snapshot, entry: StaffingEntry) -> str:
    """Person name, `[EXT] name` for external parties, or `(Unassigned)`."""
    if entry.person_id:
        person = snapshot.person(entry.person_id)
        return person.name if person and person.name else entry.person_id
    if entry.external_name:
        return f"[EXT] {entry.external_name}"
    return "(Unassigned)"
