"""Translation resources and language option lists for the UI (strings may include Unicode)."""

# i18next-style layout: {lang: {namespace: {key: text}}}
RESOURCES: dict[str, dict[str, dict[str, str]]] = {
    'en': {
        'translation': {
            'Hi': 'Hi',
            'Actions': 'Actions',
        },
    },
    'tm': {
        'translation': {
            'Hi': 'வணக்கம்',
            'Actions': 'செயல்கள்',
        },
    },
    'sp': {
        'translation': {
            'Hi': 'Hola',
            'Actions': 'Comportamiento',
        },
    },
    'tl': {
        'translation': {
            'Hi': 'హాయ్',
            'Actions': 'చర్యలు',
        },
    },
}

# Offered choices are maintained here, not derived from RESOURCES.
SHOWCASE_OPTIONS: list[tuple[str, str]] = [
    ('en', 'English'),
    ('de', 'German (Deutsch)'),
    ('es', 'Spanish (Español)'),
    ('it', 'Italian (Italiano)'),
    ('zh', 'Chinese (中文)'),
]

REGIONAL_OPTIONS: list[tuple[str, str]] = [
    ('en', 'English'),
    ('tm', 'Tamil (தமிழ்)'),
    ('sp', 'Spanish (Español)'),
    ('tl', 'Telugu (తెలుగు)'),
]

SHOWCASE_KEYS: list[str] = ['Hi', 'Actions', 'Welcome', 'Description', 'SelectLanguage']

REGIONAL_KEYS: list[str] = ['Hi', 'Actions']
