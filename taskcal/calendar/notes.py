"""Compose the notes block written into each calendar event."""

from typing import List, Optional

from ..core.models import MedicationDetails, ObservationToolDetails, Task

DEFAULT_ATTRIBUTION = "Created with taskcal"


def _medication_section(details: MedicationDetails, occurrence_label: Optional[str]) -> Optional[str]:
    if not details.medicine_name:
        return None

    lines = ["💊 MEDICATION", f"   Medicine: {details.medicine_name}"]
    if details.medicine_type:
        lines.append(f"   Type: {details.medicine_type}")

    if occurrence_label is not None:
        lines.append(f"   Dosage: {occurrence_label}")
    elif details.dosages:
        lines.append("   Dosage Schedule:")
        lines.extend(f"      • {d.label} at {d.time}" for d in details.dosages)

    return "\n".join(lines)


def compose_notes(task: Task,
                  occurrence_label: Optional[str] = None,
                  companion_name: Optional[str] = None,
                  assigned_to_name: Optional[str] = None,
                  attribution: str = DEFAULT_ATTRIBUTION) -> str:
    """
    Build the description stored in a calendar event.

    Sections appear in a fixed order, separated by a blank line, and are left
    out when their source data is missing: description, additional note,
    medication, observational tool, companion, assignee, attribution.

    Args:
        task: Task the event belongs to
        occurrence_label: Dosage label for per-dose events; the medication
            block then names only this dose instead of the full schedule
        companion_name: Display name of the companion the task is for
        assigned_to_name: Display name of the assignee
        attribution: Trailing attribution line

    Returns:
        Notes text
    """
    sections: List[str] = []

    if task.description:
        sections.append(f"📝 {task.description}")

    if task.additional_note:
        sections.append(f"💡 Note: {task.additional_note}")

    details = task.details
    if isinstance(details, MedicationDetails):
        medication = _medication_section(details, occurrence_label)
        if medication:
            sections.append(medication)

    if isinstance(details, ObservationToolDetails) and details.tool_type:
        sections.append(f"📋 Observational Tool: {details.tool_type}")

    if companion_name:
        sections.append(f"👤 Companion: {companion_name}")

    if assigned_to_name:
        sections.append(f"👥 Assigned to: {assigned_to_name}")

    if attribution:
        sections.append(attribution)

    return "\n\n".join(sections)
