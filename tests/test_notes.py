"""
Tests for event notes (taskcal/calendar/notes.py).
"""

from taskcal.calendar.notes import DEFAULT_ATTRIBUTION, compose_notes
from taskcal.core.models import Task


def _medication_task(**extra):
    data = {
        "id": "m1",
        "title": "Meds",
        "description": "After food",
        "additionalNote": "Crush the tablet",
        "details": {
            "taskType": "give-medication",
            "medicineName": "Amoxicillin",
            "medicineType": "Tablet",
            "dosages": [
                {"id": "d1", "label": "Morning", "time": "08:00"},
                {"id": "d2", "label": "Evening", "time": "20:00"},
            ],
        },
    }
    data.update(extra)
    return Task.from_dict(data)


class TestComposeNotes:

    def test_minimal_task_has_only_attribution(self):
        task = Task.from_dict({"id": "t", "title": "T"})
        assert compose_notes(task) == DEFAULT_ATTRIBUTION

    def test_section_order(self):
        notes = compose_notes(
            _medication_task(),
            companion_name="Rex",
            assigned_to_name="Sam",
        )
        sections = notes.split("\n\n")
        assert sections[0] == "📝 After food"
        assert sections[1] == "💡 Note: Crush the tablet"
        assert sections[2].startswith("💊 MEDICATION")
        assert sections[3] == "👤 Companion: Rex"
        assert sections[4] == "👥 Assigned to: Sam"
        assert sections[5] == DEFAULT_ATTRIBUTION

    def test_full_dosage_schedule(self):
        notes = compose_notes(_medication_task())
        assert "   Medicine: Amoxicillin" in notes
        assert "   Type: Tablet" in notes
        assert "   Dosage Schedule:" in notes
        assert "      • Morning at 08:00" in notes
        assert "      • Evening at 20:00" in notes

    def test_occurrence_label_names_single_dose(self):
        notes = compose_notes(_medication_task(), occurrence_label="Evening")
        assert "   Dosage: Evening" in notes
        assert "Dosage Schedule" not in notes
        assert "Morning" not in notes

    def test_observational_tool(self):
        task = Task.from_dict({
            "id": "o1",
            "title": "Check",
            "details": {"taskType": "take-observational-tool", "toolType": "Pain scale"},
        })
        assert compose_notes(task).startswith("📋 Observational Tool: Pain scale")

    def test_custom_attribution(self):
        task = Task.from_dict({"id": "t", "title": "T", "description": "Walk"})
        assert compose_notes(task, attribution="From my app") == "📝 Walk\n\nFrom my app"
