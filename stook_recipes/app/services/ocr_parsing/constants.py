"""Vocabularies and patterns shared by the OCR recipe parser."""

import re

FALLBACK_TITLE = "Onbekend recept"
MAX_TITLE_CHARS = 100
MAX_DESCRIPTION_CHARS = 500

# Plausible range for oven, smoker and core temperatures in °C
MIN_TEMPERATURE_C = 30
MAX_TEMPERATURE_C = 400

FRACTION_MAP = {
    "½": "1/2",
    "¼": "1/4",
    "¾": "3/4",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅛": "1/8",
}
FRACTION_CHARS = "".join(FRACTION_MAP.keys())

WORD_AMOUNTS = {
    "een": 1.0,
    "één": 1.0,
    "twee": 2.0,
    "drie": 3.0,
    "vier": 4.0,
    "vijf": 5.0,
    "zes": 6.0,
    "zeven": 7.0,
    "acht": 8.0,
    "negen": 9.0,
    "tien": 10.0,
    "half": 0.5,
    "halve": 0.5,
    "kwart": 0.25,
    "driekwart": 0.75,
    "anderhalf": 1.5,
    "anderhalve": 1.5,
}

# Unit token (lowercase, without trailing dot) -> canonical unit
UNIT_ALIASES = {
    # weight
    "g": "g",
    "gr": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "kilo": "kg",
    "kilogram": "kg",
    "ons": "ons",
    "pond": "pond",
    "oz": "oz",
    "lb": "lb",
    "lbs": "lb",
    # volume
    "ml": "ml",
    "milliliter": "ml",
    "mililiter": "ml",
    "cl": "cl",
    "centiliter": "cl",
    "dl": "dl",
    "deciliter": "dl",
    "l": "l",
    "lt": "l",
    "ltr": "l",
    "liter": "l",
    # spoons
    "el": "el",
    "eetl": "el",
    "eetlepel": "el",
    "eetlepels": "el",
    "tbsp": "el",
    "tablespoon": "el",
    "tablespoons": "el",
    "tl": "tl",
    "theel": "tl",
    "theelepel": "tl",
    "theelepels": "tl",
    "tsp": "tl",
    "teaspoon": "tl",
    "teaspoons": "tl",
    "lepel": "lepel",
    "lepels": "lepel",
    "schep": "schep",
    "scheppen": "schep",
    # count and kitchen measures
    "st": "stuks",
    "stuk": "stuks",
    "stuks": "stuks",
    "snuf": "snufje",
    "snufje": "snufje",
    "snufjes": "snufje",
    "pinch": "snufje",
    "mespuntje": "mespuntje",
    "teen": "teen",
    "tenen": "teen",
    "teentje": "teen",
    "teentjes": "teen",
    "takje": "takje",
    "takjes": "takje",
    "blik": "blik",
    "blikje": "blik",
    "blikjes": "blik",
    "pot": "pot",
    "potje": "pot",
    "zakje": "zakje",
    "zakjes": "zakje",
    "pak": "pak",
    "pakje": "pak",
    "bosje": "bosje",
    "bosjes": "bosje",
    "handje": "handje",
    "handjes": "handje",
    "handjevol": "handje",
    "kopje": "kopje",
    "kopjes": "kopje",
    "cup": "kopje",
    "cups": "kopje",
    "glas": "glas",
    "glazen": "glas",
    "scheut": "scheutje",
    "scheutje": "scheutje",
    "schijfje": "schijfje",
    "schijfjes": "schijfje",
    "plak": "plakje",
    "plakje": "plakje",
    "plakjes": "plakje",
    "sneetje": "sneetje",
    "sneetjes": "sneetje",
    "blaadje": "blaadje",
    "blaadjes": "blaadje",
    "druppel": "druppel",
    "druppels": "druppel",
}

# Longest first so "eetlepels" wins over "eetl" and "el"
UNIT_PATTERN = "|".join(
    re.escape(token) for token in sorted(UNIT_ALIASES, key=len, reverse=True)
)

SECTION_HEADINGS = {
    "ingredients": re.compile(
        r"^(?:ingredi[eëé]nten|ingredients?|benodigdheden|wat heb je nodig|"
        r"je hebt nodig|nodig|boodschappen(?:lijst)?)\b",
        re.I,
    ),
    "steps": re.compile(
        r"^(?:bereiding(?:swijze)?|werkwijze|instructies|stappen|zo maak je het|"
        r"aan de slag|instructions|method|directions|preparation)\b",
        re.I,
    ),
    "info": re.compile(r"^(?:info(?:rmatie)?|gegevens|over dit recept)\b", re.I),
    "tips": re.compile(r"^(?:tips?|variatie|variant|let op|opmerking(?:en)?|serveertip)\b", re.I),
}
MAX_HEADING_CHARS = 40

NOISE_PATTERNS = [
    re.compile(r"^\d{1,3}$"),
    re.compile(r"^\d{10,13}$"),
    re.compile(r"^isbn[:\s]", re.I),
    re.compile(r"^©"),
    re.compile(r"^(?:bron|foto|fotografie|styling|recept|tekst)\s*:", re.I),
    re.compile(
        r"^(?:voedingswaarde|nutritional|energie|kcal|kj|eiwit(?:ten)?|koolhydraten|"
        r"vetten?|vezels?|natrium)\b",
        re.I,
    ),
    re.compile(r"^\d+\s*(?:kcal|kj|cal)$", re.I),
    re.compile(r"^per\s+(?:portie|persoon|100\s*g)\b", re.I),
    re.compile(r"^(?:moeilijkheid|niveau|difficulty|categorie|category|keuken|cuisine)\s*:", re.I),
    re.compile(r"^[A-Z]{1,2}$"),
]

STEP_MARKER_RE = re.compile(
    r"^(?:(?:stap|step)\s*(\d{1,2})\s*[.:)\-]?\s*|(\d{1,2})\s*[.):]\s*(?=\D))",
    re.I,
)
BULLET_RE = re.compile(r"^[-•*·◦‣▪▸►⚫]\s*")

IMPERATIVE_VERBS = frozenset(
    {
        # Dutch
        "bak", "bedek", "besprenkel", "bestrijk", "bestrooi", "borstel", "breng",
        "controleer", "dek", "dep", "doe", "draai", "fruit", "garneer", "giet",
        "gril", "grill", "haal", "hak", "houd", "injecteer", "keer", "klop",
        "kook", "laat", "leg", "maak", "marineer", "meng", "neem", "pel", "pers",
        "plaats", "prik", "rasp", "rol", "rook", "roer", "rooster", "schep",
        "schil", "serveer", "smeer", "smelt", "snij", "snijd", "snipper",
        "spoel", "spuit", "strooi", "trek", "verdeel", "verhit",
        "verwarm", "verwijder", "vouw", "vul", "week", "wikkel", "wrijf", "zet",
        # English
        "add", "apply", "bake", "bring", "combine", "cook", "cover", "cut",
        "chop", "heat", "let", "mix", "place", "pour", "preheat", "remove",
        "rest", "season", "sear", "serve", "slice", "smoke", "spritz", "stir",
        "wrap",
    }
)

SERVINGS_UNITS = r"(?:personen|persoon|porties|portie|pers\.?)"
MINUTE_UNITS = r"(?:minuten|minuut|minutes|minute|mins|min)\.?"
HOUR_UNITS = r"(?:uren|uur|hours|hour|hrs|hr|u\.)"
TEMPERATURE_UNITS = r"(?:°\s*C\b|°|graden(?:\s+celsius)?|degrees)"

PREP_LABELS = (
    r"(?:voorbereidingstijd|voorbereiding|voorbereiden|bereidingstijd|"
    r"prep(?:aration)?(?:\s*time)?|snijtijd|klaarmaaktijd)"
)
COOK_LABELS = (
    r"(?:kooktijd|grilltijd|rooktijd|baktijd|braadtijd|stooftijd|oventijd|"
    r"garen|gaartijd|cook(?:ing)?\s*time|smoke\s*time)"
)
SERVINGS_LABELS = r"(?:personen|porties|aantal|serves|yield|maakt|makes|recept\s+voor)"
CORE_TEMP_LABELS = (
    r"(?:kerntemperatuur|kerntemp|interne\s+temperatuur|internal\s+temp(?:erature)?)"
)

LABELLED_METADATA_RE = re.compile(
    rf"^(?:{PREP_LABELS}|{COOK_LABELS}|{SERVINGS_LABELS}|{CORE_TEMP_LABELS}|"
    rf"totale?\s*tijd|total\s*time)\s*[:\-]?\s*\d",
    re.I,
)
METADATA_CUE_RE = re.compile(
    rf"\d\s*(?:{TEMPERATURE_UNITS}|{MINUTE_UNITS}(?![a-z])|{HOUR_UNITS}(?![a-z])|"
    rf"{SERVINGS_UNITS}(?![a-z]))|\bserves\s+\d+\b",
    re.I,
)
# The line's own number is the metadata value ("4 personen", "30 min", "110°C")
LEADING_METADATA_RE = re.compile(
    rf"^\d+(?:[.,]\d+)?(?:\s*(?:-|à|tot)\s*\d+)?\s*(?:{TEMPERATURE_UNITS}|{MINUTE_UNITS}(?![a-z])|"
    rf"{HOUR_UNITS}(?![a-z])|{SERVINGS_UNITS}(?![a-z]))",
    re.I,
)
