# static content library: education, meditation, sleep and crisis resources
# read-only catalogs, served without a backend round-trip

EDUCATION_CATEGORIES = [
    {"id": "all", "name": "All Content"},
    {"id": "basics", "name": "OCD Basics"},
    {"id": "treatment", "name": "Treatment"},
    {"id": "coping", "name": "Coping Skills"},
    {"id": "family", "name": "Family & Friends"},
    {"id": "research", "name": "Latest Research"},
]

EDUCATION_CONTENT = [
    {
        "id": "what-is-ocd",
        "title": "What is OCD? Understanding the Basics",
        "type": "video",
        "duration": 12,
        "category": "basics",
        "difficulty": "Beginner",
        "author": "Dr. Sarah Johnson, Clinical Psychologist",
        "description": "The fundamental concepts of OCD: obsessions, compulsions, and how they differ from everyday worries.",
        "key_points": [
            "Definition of obsessions and compulsions",
            "Common OCD themes and presentations",
            'How OCD differs from perfectionism or being "neat"',
            "The OCD cycle and how it maintains itself",
        ],
    },
    {
        "id": "erp-explained",
        "title": "ERP Therapy: The Gold Standard Treatment",
        "type": "video",
        "duration": 18,
        "category": "treatment",
        "difficulty": "Intermediate",
        "author": "Dr. Michael Chen, OCD Specialist",
        "description": "How Exposure and Response Prevention works and what to expect.",
        "key_points": [
            "How ERP breaks the OCD cycle",
            "Building an exposure hierarchy",
            "Response prevention techniques",
            "Working with a therapist vs. self-directed ERP",
        ],
    },
    {
        "id": "medication-options",
        "title": "Medication for OCD: SSRIs and Beyond",
        "type": "article",
        "duration": 8,
        "category": "treatment",
        "difficulty": "Intermediate",
        "author": "Dr. Lisa Rodriguez, Psychiatrist",
        "description": "Medication options for OCD, including benefits, side effects, and considerations.",
        "key_points": [
            "First-line medications for OCD",
            "How long medications take to work",
            "Managing side effects",
            "Combining medication with therapy",
        ],
    },
    {
        "id": "intrusive-thoughts",
        "title": "Understanding Intrusive Thoughts",
        "type": "video",
        "duration": 15,
        "category": "basics",
        "difficulty": "Beginner",
        "author": "Dr. Amanda Foster, Clinical Psychologist",
        "description": "Why intrusive thoughts happen, why they feel so real, and how to respond to them.",
        "key_points": [
            "Why everyone has intrusive thoughts",
            "The difference between thoughts and actions",
            "Why fighting thoughts makes them stronger",
            "Healthy ways to respond to intrusive thoughts",
        ],
    },
    {
        "id": "family-support",
        "title": "How Family Can Help (Without Enabling)",
        "type": "video",
        "duration": 20,
        "category": "family",
        "difficulty": "Beginner",
        "author": "Dr. Robert Kim, Family Therapist",
        "description": "Supporting a loved one with OCD without reinforcing symptoms.",
        "key_points": [
            "Recognizing accommodation behaviors",
            "How to respond to requests for reassurance",
            "Supporting treatment goals",
            "Taking care of your own mental health",
        ],
    },
    {
        "id": "mindfulness-ocd",
        "title": "Mindfulness Techniques for OCD",
        "type": "article",
        "duration": 10,
        "category": "coping",
        "difficulty": "Intermediate",
        "author": "Dr. Jennifer Walsh, Mindfulness Expert",
        "description": "How mindfulness complements traditional OCD treatment, with techniques to try.",
        "key_points": [
            "Observing thoughts without judgment",
            "Acceptance vs. resignation",
            "Mindful exposure exercises",
            "Daily mindfulness practices",
        ],
    },
    {
        "id": "ocd-research-2024",
        "title": "Latest OCD Research Findings (2024)",
        "type": "article",
        "duration": 12,
        "category": "research",
        "difficulty": "Advanced",
        "author": "Dr. Thomas Anderson, Research Director",
        "description": "Recent research in OCD treatment, including new therapeutic approaches and brain imaging.",
        "key_points": [
            "New treatment modalities being studied",
            "Brain imaging insights",
            "Genetic research findings",
            "Future directions in OCD treatment",
        ],
    },
    {
        "id": "workplace-ocd",
        "title": "Managing OCD in the Workplace",
        "type": "video",
        "duration": 14,
        "category": "coping",
        "difficulty": "Intermediate",
        "author": "Dr. Patricia Lee, Occupational Psychologist",
        "description": "Strategies for managing OCD symptoms at work and knowing your rights as an employee.",
        "key_points": [
            "Workplace accommodations for OCD",
            "Managing perfectionism at work",
            "Disclosure decisions",
            "Building supportive relationships with colleagues",
        ],
    },
]

MEDITATION_SESSIONS = [
    {"id": "ocd-anxiety", "title": "OCD Anxiety Relief", "duration": 10, "category": "OCD-Focused", "difficulty": "Beginner",
     "description": "Managing OCD-related anxiety and intrusive thoughts"},
    {"id": "uncertainty-tolerance", "title": "Embracing Uncertainty", "duration": 15, "category": "OCD-Focused", "difficulty": "Intermediate",
     "description": "Sitting with uncertainty without seeking reassurance"},
    {"id": "thought-observation", "title": "Observing Thoughts", "duration": 12, "category": "Mindfulness", "difficulty": "Beginner",
     "description": "Watching thoughts without judgment or engagement"},
    {"id": "body-scan-anxiety", "title": "Body Scan for Anxiety", "duration": 20, "category": "Body Awareness", "difficulty": "Beginner",
     "description": "Releasing physical tension caused by anxiety and compulsions"},
    {"id": "loving-kindness", "title": "Self-Compassion Practice", "duration": 18, "category": "Self-Compassion", "difficulty": "Intermediate",
     "description": "Kindness toward yourself, especially during difficult moments"},
    {"id": "morning-intention", "title": "Morning Intention Setting", "duration": 8, "category": "Daily Practice", "difficulty": "Beginner",
     "description": "Start the day with clarity and purpose"},
]

QUICK_PRACTICES = [
    {"title": "3-Minute Breathing Space", "duration": 3, "description": "Quick reset for overwhelming moments"},
    {"title": "5-Minute Grounding", "duration": 5, "description": "Anchor yourself in the present"},
    {"title": "2-Minute Self-Compassion", "duration": 2, "description": "Brief loving-kindness practice"},
]

SLEEP_STORIES = [
    {"id": "peaceful-garden", "title": "The Peaceful Garden", "duration": 25, "narrator": "Sarah",
     "description": "A gentle journey through a serene garden"},
    {"id": "mountain-retreat", "title": "Mountain Retreat", "duration": 30, "narrator": "Michael",
     "description": "A quiet mountain cabin for deep relaxation"},
    {"id": "ocean-waves", "title": "By the Ocean", "duration": 20, "narrator": "Emma",
     "description": "The rhythm of gentle ocean waves"},
]

AMBIENT_SOUNDS = [
    {"id": "rain", "title": "Gentle Rain", "description": "Soft rainfall on leaves"},
    {"id": "ocean", "title": "Ocean Waves", "description": "Rhythmic wave sounds"},
    {"id": "forest", "title": "Forest Night", "description": "Peaceful forest ambience"},
    {"id": "white-noise", "title": "White Noise", "description": "Consistent background sound"},
    {"id": "brown-noise", "title": "Brown Noise", "description": "Deep, rumbling sound"},
    {"id": "pink-noise", "title": "Pink Noise", "description": "Balanced frequency noise"},
]

SLEEP_BREATHING = [
    {"id": "sleep-breathing", "title": "4-7-8 Sleep Breathing", "duration": 10, "description": "Helps you fall asleep faster"},
    {"id": "box-breathing", "title": "Box Breathing", "duration": 8, "description": "Equal counts for inhale, hold, exhale, hold"},
    {"id": "progressive-relaxation", "title": "Progressive Muscle Relaxation", "duration": 15,
     "description": "Systematically relax every muscle in your body"},
]

SLEEP_TIPS = [
    "Keep your bedroom cool, dark, and quiet",
    "Avoid screens 1 hour before bedtime",
    "Try to go to bed at the same time each night",
]

# deep links are fixed, never configurable
CRISIS_HOTLINES = [
    {"title": "Call Crisis Hotline", "subtitle": "988 - Available 24/7", "uri": "tel:988"},
    {"title": "Text Crisis Support", "subtitle": "Text HOME to 741741", "uri": "sms:741741?body=HOME"},
    {"title": "Emergency Services", "subtitle": "Call 911 if you're in immediate danger", "uri": "tel:911"},
]

GROUNDING_EXERCISES = [
    {
        "id": "grounding-54321",
        "title": "5-4-3-2-1 Grounding",
        "description": "Use your senses to anchor yourself in the present moment",
        "steps": [
            "Name 5 things you can see around you",
            "Name 4 things you can physically feel",
            "Name 3 things you can hear right now",
            "Name 2 things you can smell",
            "Name 1 thing you can taste",
        ],
    },
    {
        "id": "breathing-478",
        "title": "4-7-8 Breathing",
        "description": "Calm your nervous system with controlled breathing",
        "duration_seconds": 19,
        "steps": [
            "Inhale quietly through your nose for 4 counts",
            "Hold your breath for 7 counts",
            "Exhale completely through your mouth for 8 counts",
            "Repeat this cycle 3-4 times",
        ],
    },
    {
        "id": "body-scan",
        "title": "Progressive Body Scan",
        "description": "Release tension by focusing on each part of your body",
        "steps": [
            "Start at the top of your head",
            "Notice any tension or sensations",
            "Breathe into that area and let it relax",
            "Move slowly down through your entire body",
            "End at your toes, feeling completely relaxed",
        ],
    },
]

COMMON_TRIGGERS = [
    "Contamination fears", "Checking behaviors", "Symmetry/order", "Unwanted thoughts",
    "Social situations", "Work stress", "Health concerns", "Relationship issues",
]

COMMON_EXPOSURES = [
    "Touching doorknobs without washing hands",
    "Leaving items slightly out of place",
    "Reading triggering words/phrases",
    "Watching anxiety-provoking content",
    "Resisting checking behaviors",
    "Tolerating uncertainty",
    "Social interaction challenges",
    "Contamination exposures",
]


def education_content(category: str = "all") -> list[dict]:
    if not category or category == "all":
        return list(EDUCATION_CONTENT)
    return [c for c in EDUCATION_CONTENT if c["category"] == category]


def find_education_content(content_id: str):
    for item in EDUCATION_CONTENT:
        if item["id"] == content_id:
            return item
    return None
