from __future__ import annotations

import copy
from pathlib import Path

from .content import ContentIndex
from .io_utils import save_content

SAMPLE_PROVIDERS = {
    "physicians": {
        "title": "Physicians",
        "mentalhealth": {
            "introduction": (
                "<p>Physicians face unique pressures from long shifts and high-stakes decisions.</p>"
                "<p>Burnout affects nearly half of practicing physicians.</p>"
            ),
            "stressors": [
                {
                    "title": "Administrative Burden",
                    "detail": "<p>Documentation and <strong>EHR</strong> requirements consume hours each day.</p>",
                },
                {
                    "title": "Moral Injury",
                    "detail": "Being unable to provide the care patients need because of system constraints.",
                },
            ],
            "strategies": [
                {
                    "title": "Peer Support Programs",
                    "detail": (
                        "<ul><li>Confidential peer support</li>"
                        "<li>Regular debriefing after adverse events</li></ul>"
                    ),
                },
                "Protected time for rest",
            ],
            "resources": [
                {
                    "name": "Physician Support Line",
                    "description": "Free, confidential peer support for physicians.",
                    "type": "Hotline",
                    "url": "https://www.physiciansupportline.com",
                },
                "Employee Assistance Program",
            ],
            "detailedGuide": (
                "## Recognizing burnout\n\n"
                "Emotional exhaustion, depersonalization, and a reduced sense of accomplishment "
                "are the core signs of burnout."
            ),
            "statistics": [
                {"value": "45%", "label": "of physicians report burnout symptoms", "source": "Survey"},
            ],
        },
        "physicalhealth": {
            "introduction": "Long hours and irregular schedules take a physical toll.",
            "focus_areas": [
                {"title": "Sleep Hygiene", "detail": "Strategies for restorative sleep after night shifts."},
                {"title": "Nutrition on Shift", "detail": "Packing balanced meals for long shifts."},
            ],
            "key_points": [
                "Aim for seven hours of sleep.",
                "Stay hydrated during shifts.",
            ],
            "resources": [
                {
                    "name": "Sleep Foundation",
                    "description": "Evidence-based sleep guidance.",
                    "type": "Website",
                    "url": "https://www.sleepfoundation.org",
                },
            ],
        },
    },
    "nurses": {
        "title": "Nurses",
        "mentalhealth": {
            "introduction": "Nurses carry heavy emotional workloads across every shift.",
            "stressors": [
                {"title": "Staffing Shortages", "detail": "Unsafe ratios increase stress and burnout."},
            ],
            "strategies": [
                {"title": "Mindfulness Practice", "detail": "Short mindfulness breaks reduce stress."},
            ],
            "resources": [],
        },
        "physicalhealth": {
            "introduction": "Nursing is physically demanding work.",
            "focus_areas": [
                {"title": "Back Injury Prevention", "detail": "Safe patient handling techniques."},
            ],
            "key_points": ["Use lift equipment for transfers."],
        },
    },
}

SAMPLE_CRISIS = {
    "title": "Crisis Resources",
    "resources": [
        {
            "id": "988-lifeline",
            "name": "988 Suicide & Crisis Lifeline",
            "description": "Call or text 988 for immediate support.",
            "expandedDescription": (
                "<p>Free, confidential support 24/7 for people in distress, including health care "
                "workers experiencing burnout or suicidal thoughts.</p>"
            ),
            "category": "Hotline",
            "phone": "988",
        },
        {
            "id": "crisis-text-line",
            "name": "Crisis Text Line",
            "description": "Text HOME to 741741.",
            "expandedDescription": "Trained crisis counselors respond by text message.",
            "category": "Text",
        },
    ],
}

SAMPLE_ORGANIZATION = {
    "title": "Organizational Strategies",
    "categories": [
        {
            "id": "workload",
            "name": "Workload Management",
            "introduction": "Reducing unnecessary workload is the most direct lever against burnout.",
            "strategies": [
                {
                    "id": "scribes",
                    "title": "Medical Scribes",
                    "description": "Scribes reduce documentation time in clinic.",
                    "introduction": "Offload EHR documentation.",
                    "quickWin": False,
                },
                {
                    "id": "inbox",
                    "title": "Inbox Management",
                    "description": "Triage patient messages with team support.",
                    "quickWin": True,
                },
            ],
        },
        {
            "id": "culture",
            "name": "Culture of Wellness",
            "introduction": "Leadership behaviors shape clinician well-being.",
            "strategies": [
                {
                    "id": "wellness-champions",
                    "title": "Wellness Champions",
                    "description": "Designate peer champions in each department.",
                    "quickWin": True,
                },
            ],
        },
    ],
}


def build_sample_index() -> ContentIndex:
    """Return a ready index over independent copies of the bundled sample documents."""
    return ContentIndex(
        providers=copy.deepcopy(SAMPLE_PROVIDERS),
        crisis=copy.deepcopy(SAMPLE_CRISIS),
        organization=copy.deepcopy(SAMPLE_ORGANIZATION),
    )


def build_and_save_sample_content(output_dir: str | Path = "data") -> ContentIndex:
    index = build_sample_index()
    save_content(index, output_dir)
    return index
