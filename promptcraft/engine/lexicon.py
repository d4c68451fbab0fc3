"""Static lookup tables for the enhancement engine.

All tables are process-lifetime constants and must not be mutated. Keys are
lowercase; lookups lowercase the prompt before testing membership.
"""

from typing import Dict, List, Tuple

from ..utils.exceptions import ConfigurationError
from .models import Action, Character, Setting

# Whole-word corrections applied by the normalizer (case-insensitive match).
CORRECTIONS: Dict[str, str] = {
    # typos
    "teh": "the",
    "hte": "the",
    "adn": "and",
    "wrok": "work",
    "wokr": "work",
    "thier": "their",
    "recieve": "receive",
    "definately": "definitely",
    "seperate": "separate",
    "occured": "occurred",
    "untill": "until",
    "alot": "a lot",
    "becuase": "because",
    "beacuse": "because",
    "wich": "which",
    "wierd": "weird",
    "beleive": "believe",
    "goverment": "government",
    "accomodate": "accommodate",
    "tommorow": "tomorrow",
    "freind": "friend",
    "langauge": "language",
    "fucntion": "function",
    "funtion": "function",
    "databse": "database",
    "applicaiton": "application",
    "websit": "website",
    # informal contractions
    "dont": "don't",
    "cant": "can't",
    "wont": "won't",
    "doesnt": "doesn't",
    "isnt": "isn't",
    "didnt": "didn't",
    "wasnt": "wasn't",
    "arent": "aren't",
    "couldnt": "couldn't",
    "shouldnt": "shouldn't",
    "wouldnt": "wouldn't",
    "im": "I'm",
    "ive": "I've",
    "youre": "you're",
    "theyre": "they're",
    "thats": "that's",
    "whats": "what's",
    "lets": "let's",
    "wanna": "want to",
    "gonna": "going to",
    "pls": "please",
    "plz": "please",
    "thx": "thanks",
    "u": "you",
    "ur": "your",
    # casing of proper names and acronyms
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "python": "Python",
    "github": "GitHub",
    "nodejs": "Node.js",
    "android": "Android",
    "ios": "iOS",
    "iphone": "iPhone",
    "api": "API",
    "ai": "AI",
    "sql": "SQL",
    "html": "HTML",
    "css": "CSS",
    "json": "JSON",
    "seo": "SEO",
}

CHARACTERS: Dict[str, Character] = {
    "dragon": Character(
        name="dragon",
        type="mythical creature",
        attributes=("ancient", "powerful", "intelligent"),
        species=("Western dragon", "Eastern dragon", "Wyvern", "Drake", "Wyrm"),
        roles=("guardian", "destroyer", "sage", "outcast", "last of its kind"),
    ),
    "unicorn": Character(
        name="unicorn",
        type="mythical creature",
        attributes=("pure", "magical", "elusive"),
        species=("Celestial unicorn", "Forest unicorn", "Dark unicorn"),
        roles=("protector", "healer", "guide", "hunted"),
    ),
    "phoenix": Character(
        name="phoenix",
        type="mythical creature",
        attributes=("immortal", "fiery", "rebirth"),
        species=("Fire phoenix", "Ice phoenix", "Shadow phoenix"),
        roles=("symbol of hope", "eternal witness", "catalyst of change"),
    ),
    "wizard": Character(
        name="wizard",
        type="character",
        attributes=("wise", "mysterious", "powerful"),
        archetypes=("mentor", "hermit", "corrupted", "young apprentice"),
    ),
    "robot": Character(
        name="robot",
        type="character",
        attributes=("logical", "learning", "evolving"),
        types=("android", "AI consciousness", "ancient automaton", "war machine"),
        arcs=("gaining humanity", "questioning purpose", "protecting humans"),
    ),
    "vampire": Character(
        name="vampire",
        type="character",
        attributes=("immortal", "cursed", "predatory"),
        types=("ancient noble", "reluctant monster", "feral creature"),
    ),
    "ghost": Character(
        name="ghost",
        type="supernatural",
        attributes=("ethereal", "bound", "unfinished"),
        types=("vengeful spirit", "protective guardian", "lost soul"),
        purposes=("unfinished business", "warning", "protection"),
    ),
    "warrior": Character(
        name="warrior",
        type="character",
        attributes=("skilled", "honorable", "scarred"),
        archetypes=("reluctant hero", "fallen knight", "last defender"),
    ),
    "witch": Character(
        name="witch",
        type="character",
        attributes=("mystical", "outcast", "knowledgeable"),
        types=("hedge witch", "dark sorceress", "nature guardian"),
    ),
    "elf": Character(
        name="elf",
        type="mythical race",
        attributes=("ancient", "graceful", "magical"),
        types=("high elf", "wood elf", "dark elf", "exiled"),
    ),
    "fairy": Character(
        name="fairy",
        type="mythical creature",
        attributes=("small", "mischievous", "magical"),
        types=("trickster", "guardian", "court fae"),
    ),
    "mermaid": Character(
        name="mermaid",
        type="mythical creature",
        attributes=("mysterious", "beautiful", "dangerous"),
        types=("siren", "sea guardian", "cursed human"),
    ),
    "demon": Character(
        name="demon",
        type="supernatural",
        attributes=("dark", "powerful", "tempter"),
        types=("fallen angel", "ancient evil", "bound servant"),
    ),
    "angel": Character(
        name="angel",
        type="supernatural",
        attributes=("divine", "righteous", "messenger"),
        types=("guardian", "warrior", "fallen", "observer"),
    ),
    "alien": Character(
        name="alien",
        type="character",
        attributes=("otherworldly", "advanced", "curious"),
        types=("explorer", "refugee", "observer", "invader"),
    ),
    "knight": Character(
        name="knight",
        type="character",
        attributes=("honorable", "loyal", "burdened"),
        archetypes=("questing knight", "fallen hero", "guardian"),
    ),
    "pirate": Character(
        name="pirate",
        type="character",
        attributes=("adventurous", "lawless", "cunning"),
        archetypes=("captain", "treasure hunter", "reformed criminal"),
    ),
    "detective": Character(
        name="detective",
        type="character",
        attributes=("observant", "persistent", "haunted"),
        archetypes=("noir detective", "amateur sleuth", "consulting detective"),
    ),
    "assassin": Character(
        name="assassin",
        type="character",
        attributes=("deadly", "shadowy", "conflicted"),
        archetypes=("reluctant killer", "reformed", "honor-bound"),
    ),
    "princess": Character(
        name="princess",
        type="character",
        attributes=("noble", "trapped", "resourceful"),
        archetypes=("rebel", "diplomat", "warrior princess"),
    ),
    "king": Character(
        name="king",
        type="character",
        attributes=("powerful", "burdened", "decisive"),
        archetypes=("just ruler", "tyrant", "dying king"),
    ),
    "queen": Character(
        name="queen",
        type="character",
        attributes=("regal", "strategic", "formidable"),
        archetypes=("benevolent ruler", "puppet master", "warrior queen"),
    ),
}

DEFAULT_CHARACTER = Character(
    name="protagonist", type="character", attributes=("complex", "driven", "evolving")
)

SETTINGS: Dict[str, Setting] = {
    name: Setting(name=name, type=kind, atmosphere=atmosphere, details=details)
    for name, kind, atmosphere, details in [
        ("forest", "natural", "mysterious", ("ancient trees", "dappled light", "hidden paths")),
        ("castle", "architectural", "grand", ("stone walls", "torchlight", "echoing halls")),
        ("city", "urban", "bustling", ("crowded streets", "towering buildings", "hidden alleys")),
        ("ocean", "natural", "vast", ("endless horizon", "salt spray", "hidden depths")),
        ("mountain", "natural", "majestic", ("snow peaks", "thin air", "ancient stone")),
        ("desert", "natural", "harsh", ("endless sand", "scorching sun", "oasis mirages")),
        ("space", "cosmic", "infinite", ("star fields", "cosmic silence", "alien worlds")),
        ("cave", "underground", "claustrophobic",
         ("dripping water", "absolute darkness", "hidden chambers")),
        ("village", "settlement", "rustic", ("thatched roofs", "village square", "local inn")),
        ("kingdom", "realm", "epic", ("sweeping vistas", "political intrigue", "ancient history")),
        ("dungeon", "underground", "dangerous",
         ("iron chains", "distant screams", "flickering torches")),
        ("garden", "natural", "peaceful", ("blooming flowers", "winding paths", "hidden secrets")),
        ("library", "architectural", "scholarly",
         ("dusty tomes", "towering shelves", "ancient knowledge")),
        ("battlefield", "conflict zone", "chaotic",
         ("clash of steel", "fallen warriors", "smoke and fire")),
        ("island", "isolated", "mysterious", ("hidden shores", "jungle interior", "ancient ruins")),
        ("temple", "sacred", "reverent", ("sacred symbols", "incense smoke", "echoing prayers")),
        ("tavern", "social", "lively", ("crackling fire", "ale and stories", "shadowy corners")),
        ("palace", "royal", "opulent", ("gilded halls", "courtly intrigue", "hidden passages")),
        ("swamp", "natural", "treacherous", ("murky water", "twisted trees", "unseen creatures")),
        ("ruins", "ancient", "melancholic", ("crumbling walls", "lost glory", "hidden treasures")),
        ("tower", "architectural", "isolated", ("spiral stairs", "high windows", "magical wards")),
        ("ship", "vessel", "adventurous", ("creaking timbers", "salt wind", "distant horizons")),
        ("academy", "institution", "scholarly",
         ("learned masters", "eager students", "hidden secrets")),
        ("graveyard", "sacred", "eerie",
         ("weathered stones", "mist-shrouded paths", "restless spirits")),
        ("market", "social", "vibrant", ("colorful stalls", "exotic goods", "haggling voices")),
    ]
}

# theme name -> (trigger keywords, exploration)
THEMES: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "immortality": (
        ("immortal", "eternal", "forever", "never die", "vampire", "phoenix", "elf"),
        "the burden and gift of living beyond mortal years",
    ),
    "loss": (
        ("lose", "lost", "death", "gone", "grief", "mourn"),
        "the profound impact of losing what we hold dear",
    ),
    "identity": (
        ("who am i", "true self", "destiny", "purpose", "robot", "android"),
        "the journey of self-discovery and understanding one's place in the world",
    ),
    "power": (
        ("power", "control", "rule", "kingdom", "dragon", "king", "queen"),
        "the corrupting influence and responsibility of great power",
    ),
    "redemption": (
        ("redemption", "forgive", "atone", "past", "mistake", "fallen"),
        "the possibility of overcoming past failures and finding forgiveness",
    ),
    "love": (
        ("love", "heart", "beloved", "romance", "passion"),
        "the transformative and sometimes destructive nature of love",
    ),
    "sacrifice": (
        ("sacrifice", "give up", "cost", "price", "hero"),
        "what one must surrender for a greater good",
    ),
    "knowledge": (
        ("knowledge", "learn", "secret", "truth", "wisdom", "library", "wizard"),
        "the pursuit and price of understanding hidden truths",
    ),
    "freedom": (
        ("freedom", "escape", "prison", "chain", "slave", "cage"),
        "the struggle against constraints and the meaning of true liberty",
    ),
    "legacy": (
        ("legacy", "heir", "descendant", "ancestor", "bloodline"),
        "what we leave behind and how the past shapes the future",
    ),
    "transformation": (
        ("change", "transform", "become", "evolution", "metamorphosis"),
        "the process of becoming something new, for better or worse",
    ),
    "belonging": (
        ("belong", "home", "outcast", "family", "tribe", "alone"),
        "the search for connection and a place in the world",
    ),
    "betrayal": (
        ("betray", "trust", "treachery", "deceive", "lie"),
        "the shattering of trust and its lasting consequences",
    ),
    "hope": (
        ("hope", "light", "darkness", "despair", "faith"),
        "finding light in the darkest moments",
    ),
    "mortality": (
        ("mortal", "death", "dying", "finite", "time"),
        "confronting the finite nature of existence",
    ),
}

# Themes merged in when the primary character is one of these.
CHARACTER_THEMES: Dict[str, Tuple[str, ...]] = {
    "dragon": ("power", "immortality", "knowledge"),
    "robot": ("identity", "belonging", "transformation"),
    "vampire": ("immortality", "loss", "redemption"),
    "ghost": ("loss", "belonging", "legacy"),
    "phoenix": ("transformation", "hope", "immortality"),
    "wizard": ("knowledge", "power", "sacrifice"),
}

# Used when neither keywords nor the character yield any theme.
DEFAULT_THEMES: Tuple[Tuple[str, str], ...] = (
    ("identity", "the journey of self-discovery"),
    ("transformation", "how experiences shape who we become"),
)

MAX_THEMES = 3

ACTIONS: Dict[str, Action] = {
    name: Action(name=name, type=kind, detail=detail)
    for name, kind, detail in [
        ("painting", "creative", "discovering or creating art"),
        ("fighting", "conflict", "engaging in battle or combat"),
        ("flying", "movement", "soaring through the sky"),
        ("learning", "growth", "acquiring new knowledge or skills"),
        ("saving", "heroic", "rescuing or protecting others"),
        ("destroying", "destructive", "causing devastation or ruin"),
        ("discovering", "exploration", "uncovering hidden truths"),
        ("healing", "restorative", "mending wounds or restoring health"),
        ("hunting", "pursuit", "tracking and capturing prey"),
        ("teaching", "mentorship", "passing on knowledge to others"),
        ("escaping", "flight", "fleeing from danger or captivity"),
        ("building", "creative", "constructing something new"),
        ("ruling", "leadership", "governing or commanding others"),
        ("searching", "quest", "seeking something lost or hidden"),
        ("protecting", "guardian", "defending the vulnerable"),
        ("dying", "mortality", "facing the end of existence"),
        ("awakening", "transformation", "coming to consciousness or realization"),
        ("falling", "descent", "losing status, grace, or literally plummeting"),
        ("rising", "ascent", "gaining power, status, or overcoming obstacles"),
        ("choosing", "decision", "making a crucial choice"),
    ]
}

# Number of trailing characters stripped to loosely match inflections.
ACTION_STEM_SUFFIX = 3

# Checked in order; the first genre with any keyword present wins.
GENRE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "fantasy": ("dragon", "magic", "wizard", "elf", "kingdom", "sword", "spell", "castle", "quest"),
    "scifi": ("robot", "space", "alien", "future", "technology", "android", "spaceship",
              "artificial intelligence"),
    "horror": ("ghost", "demon", "haunted", "terror", "nightmare", "monster", "curse", "blood"),
    "romance": ("love", "heart", "passion", "desire", "kiss", "beloved"),
    "mystery": ("detective", "murder", "clue", "mystery", "secret", "investigation"),
    "adventure": ("quest", "journey", "treasure", "explore", "expedition", "voyage"),
    "thriller": ("chase", "danger", "escape", "survival", "hunter", "prey"),
    "historical": ("ancient", "medieval", "war", "empire", "dynasty", "century"),
    "literary": ("meaning", "life", "death", "truth", "existence", "consciousness"),
}

GENRE_BY_CHARACTER: Dict[str, str] = {
    "dragon": "fantasy",
    "wizard": "fantasy",
    "elf": "fantasy",
    "fairy": "fantasy",
    "unicorn": "fantasy",
    "robot": "scifi",
    "alien": "scifi",
    "ghost": "horror",
    "demon": "horror",
    "vampire": "horror",
    "detective": "mystery",
    "pirate": "adventure",
    "knight": "adventure",
    "warrior": "adventure",
}

DEFAULT_GENRE = "literary fiction"

GENRE_TIPS: Dict[str, str] = {
    "fantasy": "Use evocative, lyrical language. Build a sense of wonder and ancient mystery. "
    "Magic should have rules and costs.",
    "scifi": "Ground futuristic elements in relatable human emotions. Technology should serve "
    "the story, not overwhelm it.",
    "horror": "Build dread through atmosphere and implication rather than explicit gore. "
    "Fear of the unknown is most powerful.",
    "romance": "Focus on emotional truth and character chemistry. Show vulnerability and growth.",
    "mystery": "Plant clues fairly. Build suspense through revelation and withholding. "
    "The answer should be surprising yet inevitable.",
    "adventure": "Maintain momentum through escalating challenges. Balance action with "
    "character moments.",
    "thriller": "Keep the pace tight. Use short sentences during intense moments. "
    "Create genuine stakes.",
    "historical": "Research period details but don't let them overwhelm the story. "
    "Characters should feel authentic to their time.",
    "literary": "Prioritize character depth and thematic resonance over plot. "
    "Language itself can be beautiful.",
    "literary fiction": "Prioritize character depth and thematic resonance over plot. "
    "Language itself can be beautiful.",
}

# feature label -> trigger keywords (word-boundary match)
FEATURES: Dict[str, Tuple[str, ...]] = {
    "Text-to-Speech (TTS)": ("voice", "talk", "talking", "speak", "speaks", "tts", "read aloud"),
    "Speech Recognition": ("voice", "speech", "dictation", "listen", "talk", "talking"),
    "User Authentication": ("login", "log in", "sign in", "signup", "sign up", "auth",
                            "authentication", "account", "accounts", "users"),
    "Database Design": ("database", "store data", "save", "saves", "storage", "records",
                        "history", "crud"),
    "Real-time Updates": ("real-time", "realtime", "live", "chat", "messaging", "multiplayer"),
    "Push Notifications": ("notification", "notifications", "notify", "remind", "reminder",
                           "reminders", "alert", "alerts"),
    "Payment Integration": ("pay", "payment", "payments", "checkout", "subscription",
                            "subscriptions", "billing", "stripe"),
    "Location Services": ("location", "map", "maps", "gps", "nearby", "geolocation"),
    "Camera Access": ("camera", "photo", "photos", "scan", "scanner", "qr"),
}

# app type -> (trigger keywords, extra features)
APP_TYPES: Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    "voice-interactive": (
        ("talk", "voice", "speak"),
        ("Text-to-Speech (TTS)", "Speech Recognition", "Voice Effects"),
    ),
    "game": (
        ("game",),
        ("Game Loop", "Animation System", "Score Tracking", "Levels/Progression"),
    ),
    "social": (
        ("social", "chat"),
        ("Real-time Messaging", "User Profiles", "Friend System", "Push Notifications"),
    ),
    "ecommerce": (
        ("shop", "store", "ecommerce", "e-commerce"),
        ("Product Catalog", "Shopping Cart", "Payment Integration", "Order Tracking"),
    ),
    "health": (
        ("fitness", "health", "workout"),
        ("Activity Tracking", "Health Metrics", "Progress Charts", "Reminders"),
    ),
}

# display name -> trigger keywords (word-boundary match)
LANGUAGES: Dict[str, Tuple[str, ...]] = {
    "Python": ("python", "django", "flask", "fastapi", "pandas"),
    "TypeScript": ("typescript", "ts"),
    "JavaScript": ("javascript", "js", "nodejs", "node.js", "reactjs"),
    "Java": ("java", "spring boot"),
    "C#": ("c#", "csharp", ".net", "dotnet"),
    "C++": ("c++", "cpp"),
    "Go": ("golang",),
    "Rust": ("rust",),
    "Ruby": ("ruby", "rails"),
    "PHP": ("php", "laravel"),
    "Swift": ("swift",),
    "Kotlin": ("kotlin",),
    "SQL": ("sql", "postgres", "postgresql", "mysql", "sqlite"),
    "Bash": ("bash", "shell script"),
}

# Language keywords that are also everyday English words ("a girl named Ruby",
# "a swift river"). They only count next to programming context.
AMBIGUOUS_LANGUAGE_KEYWORDS = frozenset(
    {"python", "java", "rust", "ruby", "rails", "swift", "bash", "pandas", "flask"}
)

# Code fence language hint for each display name.
LANGUAGE_FENCES: Dict[str, str] = {
    "Python": "python",
    "TypeScript": "typescript",
    "JavaScript": "javascript",
    "Java": "java",
    "C#": "csharp",
    "C++": "cpp",
    "Go": "go",
    "Rust": "rust",
    "Ruby": "ruby",
    "PHP": "php",
    "Swift": "swift",
    "Kotlin": "kotlin",
    "SQL": "sql",
    "Bash": "bash",
}


def check_tables() -> List[str]:
    """Return a list of inconsistencies between the tables (empty when sound)."""
    problems: List[str] = []

    for keyword, character in CHARACTERS.items():
        if keyword != character.name:
            problems.append(f"character key '{keyword}' != name '{character.name}'")
        if not character.attributes:
            problems.append(f"character '{keyword}' has no attributes")

    for keyword, setting in SETTINGS.items():
        if not setting.details:
            problems.append(f"setting '{keyword}' has no sensory details")

    for character, themes in CHARACTER_THEMES.items():
        if character not in CHARACTERS:
            problems.append(f"inferred themes reference unknown character '{character}'")
        for theme in themes:
            if theme not in THEMES:
                problems.append(f"character '{character}' infers unknown theme '{theme}'")

    for character, genre in GENRE_BY_CHARACTER.items():
        if character not in CHARACTERS:
            problems.append(f"genre inference references unknown character '{character}'")
        if genre not in GENRE_TIPS:
            problems.append(f"genre '{genre}' has no writing tips")

    for genre in GENRE_KEYWORDS:
        if genre not in GENRE_TIPS:
            problems.append(f"genre '{genre}' has no writing tips")
    if DEFAULT_GENRE not in GENRE_TIPS:
        problems.append("default genre has no writing tips")

    for name in ACTIONS:
        if len(name) <= ACTION_STEM_SUFFIX:
            problems.append(f"action '{name}' is too short to stem")

    for language in LANGUAGES:
        if language not in LANGUAGE_FENCES:
            problems.append(f"language '{language}' has no code fence")

    all_language_keywords = {kw for keywords in LANGUAGES.values() for kw in keywords}
    for keyword in AMBIGUOUS_LANGUAGE_KEYWORDS - all_language_keywords:
        problems.append(f"ambiguous keyword '{keyword}' is not a language trigger")

    for key in CORRECTIONS:
        if key != key.lower():
            problems.append(f"correction key '{key}' is not lowercase")

    return problems


_problems = check_tables()
if _problems:
    raise ConfigurationError("Malformed lookup tables: " + "; ".join(_problems))
