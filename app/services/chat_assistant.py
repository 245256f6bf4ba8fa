"""
Canned resume advice. Keyword rules are checked in order and the first match
wins; nothing leaves the process and nothing is stored.
"""
from typing import List, Tuple

WELCOME_MESSAGE = (
    "Hi! I'm your resume optimization assistant. Ask me anything about improving your resume, "
    "tailoring it to a job, or ATS best practices."
)

RULES: List[Tuple[Tuple[str, ...], str]] = [
    (
        ("ats", "keywords"),
        "Include exact keywords from the job description in your skills and experience sections. "
        "Use standard section titles (Experience, Education, Skills) and simple formatting for better ATS parsing.",
    ),
    (
        ("summary", "objective"),
        "Write a 2-3 line summary tailored to the role, highlighting years of experience, core skills, "
        "and a measurable achievement relevant to the job.",
    ),
    (
        ("quantify", "metrics"),
        "Quantify impact using metrics like % improvement, revenue, cost/time savings, throughput, or "
        "customer satisfaction. Example: 'Improved page load by 35% leading to +12% conversions.'",
    ),
    (
        ("format", "template"),
        "Use a clean reverse-chronological format, 10-12pt font, 1.0-1.15 line spacing, and consistent "
        "bullet styles. Keep to 1 page (early career) or 2 pages (senior).",
    ),
]

DEFAULT_REPLY = (
    "Tailor your resume to the job by mirroring required skills, showcasing measurable achievements, "
    "and prioritizing relevant experience. Keep language clear and active (e.g., 'Led', 'Improved', 'Reduced')."
)


def reply_to(message: str) -> str:
    text = message.lower()
    for keywords, reply in RULES:
        # Substring match, so "ATS-friendly" and "keywords?" both hit
        if any(keyword in text for keyword in keywords):
            return reply
    return DEFAULT_REPLY
