# proxle/word_list.py
from __future__ import annotations

import re
from collections import Counter
from typing import Dict, Iterable, Iterator, Tuple

MIN_WORD_LEN, MAX_WORD_LEN = 3, 5

_UPPER_ALPHA = re.compile(r"^[A-Z]+$")


class WordCatalog:
    """
    Immutable, ordered list of secret-word candidates.

    Order matters: the daily word is picked by position, so reordering or
    editing the list changes which word past dates map to.
    """

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str]):
        words = tuple(words)
        problems = validate_words(words)
        if problems:
            raise ValueError("invalid word catalog: " + "; ".join(problems))
        self._words: Tuple[str, ...] = words

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, index: int) -> str:
        return self._words[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.upper() in self._words

    def __repr__(self) -> str:
        return f"<WordCatalog size={len(self._words)}>"

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    def length_distribution(self) -> Dict[int, int]:
        return dict(sorted(Counter(len(w) for w in self._words).items()))


def validate_words(words: Iterable[str]) -> list[str]:
    """Return human-readable problems with a candidate list (empty when valid)."""
    problems: list[str] = []
    seen: set[str] = set()
    count = 0
    for i, w in enumerate(words):
        count += 1
        if not isinstance(w, str) or not _UPPER_ALPHA.match(w):
            problems.append(f"#{i} {w!r} is not an uppercase alphabetic word")
            continue
        if not (MIN_WORD_LEN <= len(w) <= MAX_WORD_LEN):
            problems.append(f"#{i} {w} has length {len(w)}")
        if w in seen:
            problems.append(f"#{i} {w} is a duplicate")
        seen.add(w)
    if count == 0:
        problems.append("catalog is empty")
    return problems


# Balanced list of 4- and 5-letter words, shuffled (seed 42069) so that
# consecutive days share few letters. Regenerate with
# `python -m proxle.catalog_tools shuffle`.
WORDS: tuple[str, ...] = (
    "PIECE", "SHAPE", "AGREE", "NOVEL", "DEALT", "NEWLY", "PEACE", "ENTRY", "QUEST", "TRIED", "ADMIT", "MORAL",
    "STAFF", "FLUID", "TOPIC", "BRASS", "GIANT", "RATIO", "WHICH", "EARTH", "CHART", "DRILL", "CLICK", "HENRY",
    "PETAL", "LABEL", "BLANK", "VENUS", "ROUND", "GROSS", "PINE", "VIDEO", "SHOCK", "LIGHT", "STORM", "DAILY",
    "FIRST", "FOOL", "CREAM", "MOUNT", "COMET", "LUCKY", "COUNT", "CATCH", "USAGE", "WHILE", "BREAD", "TRUNK",
    "LIVE", "GRANT", "GAVE", "LOOSE", "LUNCH", "REST", "FLED", "ARENA", "QUIT", "SOFT", "FULLY", "TOOK",
    "GROUP", "MOTOR", "SINCE", "SMALL", "PEARL", "OCEAN", "STILL", "LAUGH", "FIBER", "BOOTH", "BRAVE", "LYING",
    "CAUSE", "THEFT", "ANGRY", "OATH", "WOMAN", "TASK", "HEART", "ISSUE", "WEEK", "MATCH", "UNTIL", "SMITH",
    "TOUGH", "LIMIT", "DRONE", "MUSIC", "BRAND", "RICE", "COACH", "LONG", "HOTEL", "FRAME", "SPORT", "PLACE",
    "CLOSE", "WRONG", "ENTER", "BOARD", "STONE", "JOKE", "FIRM", "VERSE", "PHOTO", "ALTER", "AGED", "PRIDE",
    "HONOR", "DATED", "MAJOR", "LEAST", "WORRY", "BREED", "TRUTH", "THREE", "POINT", "AGENT", "SHARE", "FIELD",
    "DOZEN", "BACK", "THEIR", "ADULT", "PROOF", "DRAFT", "BRIEF", "WATER", "HOUSE", "NEED", "TANGO", "FAITH",
    "MARCH", "SERVE", "ACID", "ASIDE", "ECHO", "DUKE", "DRAWN", "CHILD", "SIXTH", "TRIAL", "URBAN", "ALARM",
    "FALSE", "STORY", "WORE", "TAXES", "TERRY", "RAGE", "DOUBT", "TITLE", "ARISE", "GIVEN", "FLEET", "ENEMY",
    "TRADE", "WHOSE", "TWICE", "DRIVE", "TILL", "ADOPT", "BASIS", "AFTER", "FOUND", "RIGHT", "TOUCH", "FENCE",
    "EARLY", "SHEET", "MENU", "EASEL", "OTHER", "SIXTY", "SHORT", "BRUSH", "SPENT", "SMOKE", "SELF", "GREAT",
    "READY", "FORTY", "PROVE", "AGAIN", "CARE", "MAGIC", "SPEAK", "BOUND", "SHELL", "FORUM", "STEEL", "FIGHT",
    "MICE", "SURE", "COAT", "THIRD", "BELOW", "SPEC", "LIVES", "LEWIS", "SOLID", "MESS", "CHOSE", "STEAM",
    "START", "NEEDS", "ROMAN", "SPEND", "LARGE", "FIVE", "PRAY", "WATCH", "TREND", "BRAIN", "SWORD", "DROVE",
    "RENT", "BUILD", "CHAIR", "FRESH", "ARMOR", "SIZE", "VOICE", "LINKS", "DENSE", "GOAL", "TABLE", "EQUAL",
    "PLAY", "BEST", "ALBUM", "SMART", "CHIP", "POUND", "THEME", "AWARD", "HINT", "EIGHT", "SUPER", "ALLOW",
    "DISC", "VERY", "YOUTH", "NAME", "NOTED", "FORCE", "ELITE", "THESE", "FUEL", "SOLE", "WARD", "SPARK",
    "BELT", "TRUST", "TAKEN", "ROYAL", "DEBUT", "SORRY", "GRACE", "TURN", "EMPTY", "MAIN", "STUDY", "MIGHT",
    "UNDER", "CHASE", "LANCE", "WORTH", "LEVEL", "GRASS", "THING", "ALONE", "BULK", "QUICK", "SPLIT", "OUGHT",
    "CHAOS", "TIMES", "OFFER", "ALIVE", "SLEEP", "CRASH", "MEDIA", "AVOID", "TROT", "STAGE", "REFER", "WHITE",
    "EVENT", "FAULT", "LEAP", "CHECK", "OPEN", "BEGAN", "CHEAP", "SOUND", "YEAH", "SHELF", "SOUTH", "HIRE",
    "SHUT", "TEACH", "LOGO", "ROBIN", "DEATH", "VISIT", "ALERT", "MANOR", "BLACK", "CROWN", "VALID", "SENSE",
    "COVER", "GLOBE", "GROWN", "AUDIT", "BREAK", "SEAL", "ALONG", "MOVIE", "LEASE", "SHINE", "CHARM", "LEAVE",
    "STRIP", "HEAVY", "GULF", "SCENE", "EXIST", "THANK", "MAYBE", "DUTY", "DRANK", "SPAN", "PITCH", "CARRY",
    "YIELD", "SWEET", "ARRAY", "CLOCK", "SHOOT", "THAN", "ALIEN", "MIXED", "RODE", "BEGIN", "TOWER", "MAKER",
    "TRULY", "MOTH", "ANGER", "GRAND", "COAST", "FROM", "MOVED", "SPARE", "DEPTH", "DREAM", "BOOST", "THOSE",
    "BOSS", "GOLF", "EDGE", "JUDGE", "ROUGH", "BLOOD", "THORN", "CRAZY", "CRIME", "DANCE", "SPOKE", "KNOWN",
    "STUCK", "BEACH", "CLASS", "LOCAL", "PRIZE", "CAKE", "CURVE", "CIVIL", "FOCUS", "WORST", "TRAIL", "SIGHT",
    "WASH", "TIGHT", "THAT", "APART", "ZERO", "ASSET", "MOUSE", "THERE", "GUEST", "DELTA", "MOUTH", "INPUT",
    "WEST", "BUYER", "POWER", "CLEAR", "KNIT", "BUILT", "FALL", "LAMP", "ROUTE", "WORLD", "LEAN", "FRANK",
    "SPEED", "EAGLE", "WASTE", "TERM", "CHEST", "MODEL", "BADLY", "ABOVE", "TREE", "WHEN", "CYCLE", "CROSS",
    "KEEP", "SWING", "SWIM", "LINE", "CRAFT", "TRIBE", "STOCK", "DOING", "LOVE", "SHARK", "JONES", "STOOD",
    "BLAME", "RACE", "TOMB", "TASTE", "PASS", "TROOP", "FIXED", "ANGEL", "HORN", "APPLY", "INNER", "HARRY",
    "GONE", "ROGER", "SKILL", "HELL", "TRIES", "JIMMY", "DRINK", "WHEEL", "ARROW", "RANGE", "HUMAN", "FRONT",
    "SLIDE", "BLEED", "SHADE", "ENJOY", "BLOCK", "ZOOM", "TRAIN", "PLATE", "PROBE", "REACH", "BLADE", "OFTEN",
    "UPPER", "WHERE", "PHONE", "PROSE", "NORTH", "CLEAN", "TEXAS", "JUMP", "ELECT", "BROAD", "TEMPO", "SHARP",
    "POPE", "CHAIN", "AREA", "ALIKE", "DENY", "ABUSE", "BENCH", "HAPPY", "ROBOT", "VALUE", "FIFTH", "UPSET",
    "CORAL", "KISS", "PRINT", "BAKER", "LIAR", "IMAGE", "FUNNY", "GRADE", "NIGHT", "RAVEN", "LEST", "POLL",
    "GUESS", "LOGIC", "NOISE", "PARTY", "OCCUR", "SCORE", "WORSE", "UNION", "DRAMA", "DELAY", "SOLVE", "GATE",
    "FORTH", "SCOPE", "AUDIO", "STORE", "PANEL", "LOWER", "PLAIN", "QUEEN", "BODY", "BLAZE", "BEING", "MAYOR",
    "BASIC", "WILD", "SIZED", "PUSH", "WERE", "FINAL", "ALIGN", "STUFF", "HOOD", "PROUD", "PATH", "EXACT",
    "TRUCK", "BRING", "JOINT", "SPED", "THINK", "EXTRA", "DRESS", "STEP", "EVERY", "FLAME", "LEARN", "JAPAN",
    "WOMEN", "BROWN", "WHOLE", "MEANT", "FLOOR", "AWARE", "EAGER", "DYING", "BLIND", "BLESS", "CROWD", "FROST",
    "LEGAL", "IDEAL", "TENT", "NEVER", "JUNE", "SMILE", "SHOW", "VIRUS", "WALTZ", "FRUIT", "GREEN", "BIRTH",
    "MINOR", "THREW", "GRAY", "BLOOM", "THICK", "SOIL", "LEMON", "CRACK", "GLASS", "SHIFT", "PRESS", "METAL",
    "GREY", "RIDE", "SHOWN", "CLOUD", "RIVER", "BROKE", "SCALE", "SUITE", "DARK", "LASER", "LAYER", "BOOK",
    "HORSE", "LOAD", "GOING", "PAGE", "APPLE", "YOUNG", "PILOT", "CARD", "STYLE", "ARGUE", "BASES", "MARIA",
    "GUIDE", "THROW", "SUGAR", "VITAL", "TREAT", "FATE", "CRUDE", "SPACE", "RAPID", "MANY", "CALIF", "LATER",
    "ROOT", "FRAUD", "BLAST", "STATE", "SEVEN", "REPLY", "CLIMB", "HYDRA", "FOUR", "MONEY", "FIFTY", "RELAX",
    "NOBLE", "BILLY", "UNDUE", "SHIRT", "GRAIN", "THEN", "COPY", "CALM", "WOULD", "GENE", "ORBIT", "HALL",
    "AHEAD", "ERROR", "WOUND", "VOCAL", "VOID", "MONTH", "UNITY", "RADIO", "JAIL", "NURSE", "GIVE", "THEM",
    "FADE", "QUIET", "CHINA", "COURT", "STICK", "SWIFT", "VETO", "GRAVE", "CHIEF", "SINK", "ABLE", "PHASE",
    "QUITE", "KENT", "PRIOR", "TRACK", "JACK", "RAISE", "CAMP", "PAPER", "INDEX", "STAKE", "HENCE", "WROTE",
    "WHALE", "ACTOR", "PLANT", "CABLE", "ORDER", "WIRE", "COULD", "PAINT", "RIVAL", "LORE", "SHALL", "GRIM",
    "CLAIM", "TODAY", "RURAL", "ABOUT", "RANK", "WRITE", "VILLA", "GUARD", "MINUS", "TIGER", "STAND", "FLASH",
    "PRICE", "PRIME", "MERCY", "ACUTE", "TRICK", "TOTAL", "THIS", "PLANE", "WHAT", "WILL", "MARK", "NOVA",
    "USUAL", "ANGLE", "PETER",
)

DEFAULT_CATALOG = WordCatalog(WORDS)
