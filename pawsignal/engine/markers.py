"""
Marker tables: every keyword list the engine relies on, declared as data.

Each table is a named MarkerSet evaluated by one generic routine. Phrases are
matched case-insensitively on word boundaries, so "tense" never fires inside
"intense" and "tenso" never fires inside "tensa". English and Spanish forms
live side by side because the captioning step answers in either language.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Tuple

from pawsignal.config import Emotion


@lru_cache(maxsize=None)
def _compile(phrases: Tuple[str, ...]) -> Pattern:
    # longest first so "play bow" is reported before "play"
    ordered = sorted(phrases, key=len, reverse=True)
    alternation = "|".join(re.escape(p) for p in ordered)
    return re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE)


@dataclass(frozen=True)
class MarkerSet:
    """
    A named, ordered list of phrases.

    Attributes:
        name: Table name, used in logs and tests
        phrases: Lowercase phrases
    """
    name: str
    phrases: Tuple[str, ...]

    @property
    def pattern(self) -> Pattern:
        return _compile(self.phrases)

    def search(self, text: Optional[str]) -> Optional[str]:
        """First phrase found in ``text`` (longest-first), or None."""
        if not text:
            return None
        m = self.pattern.search(text)
        return m.group(0).lower() if m else None

    def found_in(self, *texts: Optional[str]) -> bool:
        return any(self.search(t) for t in texts)

    def hits(self, text: Optional[str]) -> Tuple[str, ...]:
        """All phrases of the table present in ``text``, in table order."""
        if not text:
            return ()
        return tuple(p for p in self.phrases if _compile((p,)).search(text))

    def shared(self, left: str, right_texts: Iterable[str]) -> Optional[str]:
        """First phrase present in ``left`` and in any of ``right_texts``."""
        right_texts = tuple(right_texts)
        for phrase in self.hits(left):
            single = _compile((phrase,))
            if any(single.search(r) for r in right_texts if r):
                return phrase
        return None


# =============================================================================
# Matcher tables
# =============================================================================

GAME_MARKERS = MarkerSet("game", (
    "play bow", "play-bow", "play", "playful", "playing", "invitation",
    "invitation to play",
    "juego", "jugar", "invitación", "invitación a jugar",
))
"""Record text that doubles a signal's score"""

PLAY_BOW_PHRASES = MarkerSet("play_bow", (
    "play bow", "play-bow", "chest on the ground", "chest to the ground",
    "chest to the floor", "chest down", "hips up", "tail wagging",
    "pecho en suelo", "pecho en el suelo", "cadera arriba", "cola moviendo",
))

SUBMISSION_PHRASES = MarkerSet("submission", (
    "crouched", "cowering", "between legs", "between the legs", "tucked",
    "pinned back", "flattened", "half-closed", "avoiding", "looking away",
    "averted", "still",
    "encogido", "entre piernas", "hacia atrás", "semicerrados", "evitando",
    "tensa", "quieto",
))

AGGRESSION_PHRASES = MarkerSet("aggression", (
    "rigid", "stiff", "threat", "threatening", "menacing", "intense stare",
    "fixed stare", "hard stare", "baring teeth", "bared teeth", "showing teeth",
    "growl", "growling", "snarl", "snarling", "hackles raised", "frozen",
    "rígido", "rígida", "tenso", "amenazante", "mirada intensa",
    "mostrando dientes", "inmóvil", "amenaza", "gruñido",
))

JOY_PHRASES = MarkerSet("joy", (
    "joy", "happy", "bright", "enthusiasm", "energy", "energetic", "jumping",
    "bouncing", "bouncy", "circles", "relaxed", "loose",
    "alegría", "felices", "brillantes", "entusiasmo", "energía", "saltando",
    "círculos", "relajado",
))

MATCH_PHRASE_SETS: Tuple[MarkerSet, ...] = (
    PLAY_BOW_PHRASES,
    SUBMISSION_PHRASES,
    AGGRESSION_PHRASES,
    JOY_PHRASES,
)
"""Domain phrase lists for the third match policy, in priority order"""

MIN_SPECIFIC_WORD_LENGTH = 7
MIN_PHRASE_WORDS = 6

STOP_WORDS = frozenset({
    "between", "towards", "without", "slightly", "movement", "movements",
    "position", "posture", "forward", "looking", "standing", "sitting",
    "because", "another", "through",
    "está", "con", "del", "las", "los", "una", "para", "como", "muy", "más",
    "sin", "por", "que", "este", "esta", "eso", "esa", "hacia", "sobre",
    "entre", "desde", "hasta", "pegada", "pegadas", "movimiento",
    "movimientos", "suelo", "cuerpo", "cabeza", "cola", "ojos", "orejas",
    "boca", "postura", "sonidos",
})
"""Common words never used for single-word matching"""

SPECIFIC_VOCABULARY = frozenset({
    "crouched", "cowering", "avoiding", "trembling", "shaking", "flattened",
    "half-closed", "motionless", "threatening", "menacing", "snarling",
    "growling", "hackles", "lunging", "relaxed", "bouncing", "wagging",
    "zoomies", "spinning", "circles", "jumping", "excited", "whining",
    "whimpering", "barking", "yawning", "panting", "sniffing", "licking",
    "encogido", "semicerrados", "evitando", "amenazante", "amenaza",
    "inmóvil", "mostrando", "dientes", "alegría", "felices", "brillantes",
    "entusiasmo", "energía", "saltando", "círculos", "relajado",
})
"""The only single words distinctive enough to count as a match"""


# =============================================================================
# Priority detector tables
# =============================================================================

PLAY_BOW_MARKERS = MarkerSet("play_bow_markers", (
    "chest on the ground", "chest to the ground", "chest on the floor",
    "chest to the floor", "chest to floor", "chest down", "chest lowered",
    "hips up", "hips raised", "rear up", "rear end up", "butt up",
    "tail wagging", "wagging tail", "play bow", "play-bow", "play posture",
    "invitation to play",
    "pecho en el suelo", "pecho al suelo", "pecho en suelo", "pecho al piso",
    "pecho en piso", "trasero arriba", "cadera arriba", "cola moviendo",
    "cola moviéndose", "cola agitada", "postura de juego", "invitación a jugar",
))
"""Any one of these in posture/tail/movements triggers the play-bow override"""

CHEST_WORDS = MarkerSet("chest", ("chest", "pecho"))
LOWERED_WORDS = MarkerSet("lowered", (
    "ground", "floor", "down", "lowered", "low", "suelo", "piso",
))
HIPS_WORDS = MarkerSet("hips", (
    "hips", "hip", "rear", "butt", "bottom", "hindquarters", "haunches",
    "cadera", "trasero",
))
RAISED_WORDS = MarkerSet("raised", (
    "up", "raised", "high", "elevated", "in the air", "arriba", "alto",
    "alta", "levantado", "levantada",
))
TAIL_MOVING_WORDS = MarkerSet("tail_moving", (
    "wagging", "wag", "wags", "moving", "swishing", "swinging", "sweeping",
    "moviendo", "moviéndose", "agitada", "movimiento",
))

TENSION_MARKERS = MarkerSet("tension", (
    "rigid", "stiff", "tense", "threat", "threatening", "menacing",
    "dominance", "intense stare", "hard stare", "fixed stare", "bared teeth",
    "baring teeth", "showing teeth",
    "rígido", "rígida", "tenso", "amenaza", "amenazante", "dominancia",
    "mirada intensa", "mostrando dientes",
))
"""Explicit tension in a description suppresses the play-bow override"""

AGGRESSION_MARKERS = MarkerSet("aggression_override", (
    "aggression", "aggressive", "defense", "defensive", "threat",
    "threatening", "growl", "growls", "growling", "teeth", "warning",
    "dominance", "intimidation", "rigid", "tense", "menacing", "intense stare",
    "agresión", "defensa", "amenaza", "gruñido", "dientes", "advertencia",
    "dominancia", "intimidación", "rígido", "tenso", "amenazante",
    "mirada intensa",
))
"""Any of these in a matched signal forces the aggressive emotion"""


# =============================================================================
# Reward-expectation tables
# =============================================================================

PAW_RAISING = MarkerSet("paw_raising", (
    "paw raised", "raised paw", "paw lifted", "lifted paw", "lifting a paw",
    "lifting paw", "paws raised", "paw in the air", "giving paw",
    "giving a paw", "offering a paw", "offering paw", "pawing",
    "pata levantada", "manotazo", "manotazos", "dar la pata", "pata en el aire",
    "levantando pata", "patas levantadas",
))

INTENT_GAZE = MarkerSet("intent_gaze", (
    "fixed gaze", "attentive eyes", "watching intently", "staring at",
    "eye contact", "direct gaze", "eyes wide open", "looking up at",
    "eyes on the food", "eyes on the treat",
    "mirada fija", "ojos atentos", "mirando intensamente", "contacto visual",
    "mirada directa", "ojos bien abiertos", "mirando fijamente",
))
"""Expectant gaze; "fixed stare"/"hard stare" are tension, not expectation"""

MOUTH_OPEN = MarkerSet("mouth_open", (
    "mouth open", "open mouth", "tongue out", "tongue visible", "drool",
    "drooling", "salivating", "licking lips", "lip licking", "wet muzzle",
    "boca abierta", "lengua visible", "baba", "humedad", "salivación",
    "hocico húmedo", "boca ligeramente abierta",
))

REWARD_CONTEXT = MarkerSet("reward_context", (
    "waiting for food", "waiting for a treat", "waiting for a snack",
    "reward", "treat", "treats", "snack", "food", "kibble", "dinner",
    "esperando comida", "esperando premio", "esperando snack", "recompensa",
    "comida", "premio", "alimento",
))

REWARD_VETO = MarkerSet("reward_veto", AGGRESSION_MARKERS.phrases + (
    "fear", "fearful", "scared", "afraid", "agresivo", "miedo",
))
"""Aggression or fear anywhere in the observation or result cancels a reward pattern"""


# =============================================================================
# Classifier tables
# =============================================================================

PLAY_BOW_SIGNAL_MARKERS = MarkerSet("play_bow_signal", (
    "play bow", "play-bow", "chest to floor", "chest to the floor",
    "chest on the ground", "hips up", "rear up",
    "pecho al piso", "cadera arriba", "pecho en el suelo", "trasero arriba",
))
FLOOR_WORDS = MarkerSet("floor", ("floor", "ground", "suelo", "piso"))
PLAY_BOW_EXCLUSIONS = MarkerSet("play_bow_exclusions", (
    "rigid", "stiff", "tense", "threat", "threatening", "dominance", "erect",
    "menacing", "intense stare", "hard stare", "fixed stare", "bared teeth",
    "baring teeth", "showing teeth",
    "rígido", "tenso", "amenaza", "dominancia", "erguido", "amenazante",
    "mirada intensa", "mostrando dientes",
))

BUCKET_MARKERS: Tuple[Tuple[Emotion, MarkerSet], ...] = (
    (Emotion.PLAYFUL, MarkerSet("playful", (
        "play", "playful", "playing", "fun", "excitement", "joy", "invitation",
        "juego", "diversión", "excitación", "alegría", "invitación",
    ))),
    (Emotion.FEARFUL, MarkerSet("fearful", (
        "fear", "fearful", "submission", "submissive", "insecurity", "avoidance",
        "miedo", "sumisión", "inseguridad", "evitación",
    ))),
    (Emotion.ANXIOUS, MarkerSet("anxious", (
        "anxiety", "anxious", "stress", "nervousness", "nervous",
        "ansiedad", "estrés", "nerviosismo",
    ))),
    (Emotion.HAPPY, MarkerSet("happy", (
        "happiness", "happy", "content", "contentment", "relaxation", "relaxed",
        "felicidad", "contento", "relajación",
    ))),
    (Emotion.CURIOUS, MarkerSet("curious", (
        "curiosity", "curious", "interest", "attention",
        "curiosidad", "interés", "atención",
    ))),
    (Emotion.DEMANDING, MarkerSet("demanding", (
        "demand", "demanding", "insistence",
        "exigencia", "insistencia", "demanda",
    ))),
)
"""Bucket routing, first match wins; anything else lands in neutral"""


# =============================================================================
# Situation tables
# =============================================================================

VET_PLACES = MarkerSet("vet_places", (
    "vet", "vets", "veterinarian", "veterinary", "animal hospital", "clinic",
    "veterinario", "veterinaria", "clínica",
))
HOME_PLACES = MarkerSet("home_places", ("home", "house", "casa", "hogar"))
UNFAMILIAR_DOGS = MarkerSet("unfamiliar_dogs", (
    "unfamiliar dog", "unknown dog", "strange dog", "new dog",
    "perro desconocido", "perro extraño",
))


def marker_set_for(emotion: Emotion) -> Optional[MarkerSet]:
    for bucket_emotion, markers in BUCKET_MARKERS:
        if bucket_emotion == emotion:
            return markers
    return None
