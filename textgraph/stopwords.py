from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Iterator, List

log = logging.getLogger("textgraph.stopwords")


# -----------------------
# Standard lists
# -----------------------
STANDARD_STOPWORDS: Dict[str, List[str]] = {
    "de": [
        # Articles
        "der", "die", "das", "den", "dem", "des", "ein", "eine", "einer", "einem", "einen", "eines",
        # Pronouns
        "ich", "du", "er", "sie", "es", "wir", "ihr", "mich", "dich", "sich", "uns", "euch",
        "mir", "dir", "ihm", "ihnen", "mein", "dein", "sein", "unser", "euer",
        "meiner", "deiner", "seiner", "unserer", "eurer", "ihrer",
        "meine", "deine", "seine", "unsere", "eure", "ihre",
        "meinen", "deinen", "seinen", "unseren", "euren", "ihren",
        "meinem", "deinem", "seinem", "unserem", "eurem", "ihrem",
        "meines", "deines", "seines", "unseres", "eures", "ihres",
        "dieser", "diese", "dieses", "diesen", "diesem",
        "jener", "jene", "jenes", "jenen", "jenem",
        "welcher", "welche", "welches", "welchen", "welchem",
        "was", "wer", "wen", "wem", "wessen",
        "man", "selbst", "selber", "einander",
        # Prepositions
        "an", "auf", "aus", "bei", "bis", "durch", "für", "gegen", "hinter", "in", "mit",
        "nach", "neben", "ohne", "über", "um", "unter", "von", "vor", "während", "wegen",
        "zwischen", "zu", "zum", "zur", "ab", "außer", "binnen", "entlang", "gegenüber",
        "gemäß", "laut", "mittels", "samt", "seit", "statt", "trotz", "via",
        # Conjunctions
        "und", "oder", "aber", "sondern", "denn", "doch", "jedoch", "weil", "da", "wenn",
        "als", "ob", "obwohl", "obgleich", "falls", "sofern", "soweit", "damit", "dass",
        "daß", "bevor", "ehe", "nachdem", "sobald", "solange", "sooft", "indem",
        "wodurch", "wohingegen", "obschon", "wenngleich", "entweder", "weder", "noch", "sowohl",
        # Auxiliary verbs
        "ist", "sind", "war", "waren", "bin", "bist", "gewesen", "sei", "seien",
        "haben", "hat", "hatte", "hatten", "habe", "hast", "gehabt", "hätte", "hätten",
        "werden", "wird", "wurde", "wurden", "wirst", "werde", "geworden", "würde", "würden",
        "können", "kann", "konnte", "konnten", "kannst", "könnte", "könnten", "gekonnt",
        "müssen", "muss", "muß", "musste", "mussten", "musst", "müsste", "müssten", "gemusst",
        "sollen", "soll", "sollte", "sollten", "sollst", "gesollt",
        "wollen", "will", "wollte", "wollten", "willst", "gewollt",
        "dürfen", "darf", "durfte", "durften", "darfst", "dürfte", "dürften", "gedurft",
        "mögen", "mag", "mochte", "mochten", "magst", "möchte", "möchten", "gemocht",
        # Adverbs
        "nicht", "auch", "nur", "schon", "so", "sehr", "mehr", "immer", "hier",
        "dort", "dann", "wann", "wo", "wie", "warum", "weshalb", "wieso", "woher",
        "wohin", "nun", "jetzt", "heute", "gestern", "morgen", "gerade", "gleich", "bald",
        "oft", "manchmal", "nie", "niemals", "kaum", "fast", "etwa", "ungefähr", "vielleicht",
        "wohl", "bestimmt", "sicher", "gewiss", "natürlich", "einfach", "ganz", "gar",
        "ziemlich", "recht", "eher", "bereits", "längst", "endlich", "zunächst", "zuerst",
        "zuletzt", "danach", "davor", "dabei", "dazu", "dafür", "dagegen", "daher", "dahin",
        "darum", "darauf", "daraus", "darin", "davon", "daneben", "darüber", "darunter",
        "hierher", "hierhin", "hierbei", "hierfür", "hiermit", "hierzu",
        # Other common words
        "alle", "allem", "allen", "aller", "alles", "andere", "anderem", "anderen", "anderer",
        "anderes", "anders", "beiden", "beides", "beide", "beim", "besonders",
        "bisher", "derselbe", "dieselbe", "dasselbe", "denselben", "demselben", "desselben",
        "dessen", "deren", "derer", "dies", "diesseits", "jede", "jedem", "jeden", "jeder",
        "jedes", "kein", "keine", "keinem", "keinen", "keiner", "keines",
        "viel", "viele", "vielem", "vielen", "vieler", "vieles", "wenig", "wenige", "wenigem",
        "wenigen", "weniger", "weniges", "einige", "einigem", "einigen", "einiger", "einiges",
        "manche", "manchem", "manchen", "mancher", "manches", "mehrere", "mehreren", "mehrerer",
        "solch", "solche", "solchem", "solchen", "solcher", "solches",
        "etwas", "nichts", "jemand", "niemand", "irgend", "irgendwo", "irgendwie",
        "irgendwann", "irgendwas", "irgendwer",
    ],
    "en": [
        # Articles
        "a", "an", "the",
        # Pronouns
        "i", "me", "my", "mine", "myself",
        "you", "your", "yours", "yourself", "yourselves",
        "he", "him", "his", "himself",
        "she", "her", "hers", "herself",
        "it", "its", "itself",
        "we", "us", "our", "ours", "ourselves",
        "they", "them", "their", "theirs", "themselves",
        "who", "whom", "whose", "which", "what", "that", "this", "these", "those",
        "whoever", "whomever", "whatever", "whichever",
        "anyone", "anybody", "anything", "someone", "somebody", "something",
        "everyone", "everybody", "everything", "nobody", "nothing",
        "each", "every", "either", "neither", "both", "all", "any", "some", "none",
        "one", "ones", "other", "others", "another",
        # Prepositions
        "about", "above", "across", "after", "against", "along", "among", "around",
        "at", "before", "behind", "below", "beneath", "beside", "besides", "between",
        "beyond", "by", "down", "during", "except", "for", "from", "in", "inside",
        "into", "like", "near", "of", "off", "on", "onto", "out", "outside", "over",
        "past", "since", "through", "throughout", "till", "to", "toward", "towards",
        "under", "underneath", "until", "up", "upon", "with", "within", "without",
        # Conjunctions
        "and", "but", "or", "nor", "yet", "so", "because", "although", "though",
        "while", "whereas", "if", "unless", "when", "whenever", "where",
        "wherever", "whether", "as", "than", "once",
        # Auxiliary verbs
        "be", "am", "is", "are", "was", "were", "been", "being",
        "have", "has", "had", "having",
        "do", "does", "did", "doing", "done",
        "will", "would", "shall", "should", "may", "might", "must", "can", "could",
        # Common verbs
        "get", "gets", "got", "getting", "gotten",
        "make", "makes", "made", "making",
        "go", "goes", "went", "going", "gone",
        "come", "comes", "came", "coming",
        "take", "takes", "took", "taking", "taken",
        "see", "sees", "saw", "seeing", "seen",
        "know", "knows", "knew", "knowing", "known",
        "think", "thinks", "thought", "thinking",
        "say", "says", "said", "saying",
        # Adverbs
        "not", "n't", "also", "just", "only", "even", "still", "already", "always",
        "never", "ever", "often", "sometimes", "usually", "really", "very", "too",
        "quite", "rather", "almost", "enough", "much", "more", "most", "less", "least",
        "well", "better", "best", "worse", "worst",
        "here", "there", "how", "why",
        "now", "then", "today", "tomorrow", "yesterday",
        "again", "back", "away", "together", "apart",
        # Other common words
        "such", "same", "different", "own", "else", "whole", "certain", "sure",
        "able", "unable", "likely", "unlikely",
        "yes", "no", "maybe", "perhaps",
        "please", "thank", "thanks", "sorry", "okay", "ok",
        "mr", "mrs", "ms", "dr", "etc", "vs",
        # Contractions
        "i'm", "i've", "i'll", "i'd",
        "you're", "you've", "you'll", "you'd",
        "he's", "he'll", "he'd",
        "she's", "she'll", "she'd",
        "it's", "it'll",
        "we're", "we've", "we'll", "we'd",
        "they're", "they've", "they'll", "they'd",
        "that's", "that'll", "that'd",
        "who's", "who'll", "who'd",
        "what's", "what'll",
        "there's", "there'll",
        "here's",
        "let's",
        "isn't", "aren't", "wasn't", "weren't",
        "haven't", "hasn't", "hadn't",
        "don't", "doesn't", "didn't",
        "won't", "wouldn't", "shan't", "shouldn't",
        "can't", "cannot", "couldn't",
        "mustn't", "mightn't",
        "needn't",
    ],
}


def get_standard_stopwords(language: str) -> List[str]:
    """Return the built-in stopword list for `language` ('en' or 'de'); empty if unknown."""
    return list(STANDARD_STOPWORDS.get(language, []))


def normalize_word(word: str) -> str:
    return word.strip().lower()


# -----------------------
# Snapshot
# -----------------------
class StopwordSet:
    """Immutable stopword snapshot.

    Every "mutation" returns a new snapshot, so a token sequence computed from one
    snapshot never changes underneath its caller. Words are lowercased on insertion.
    """

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str] = ()):
        self._words: FrozenSet[str] = frozenset(w for w in (normalize_word(x) for x in words) if w)

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __len__(self) -> int:
        return len(self._words)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StopwordSet):
            return self._words == other._words
        if isinstance(other, (set, frozenset)):
            return self._words == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        return f"StopwordSet({len(self._words)} words)"

    def with_added(self, *words: str) -> "StopwordSet":
        return StopwordSet(self._words.union(normalize_word(w) for w in words))

    def with_removed(self, *words: str) -> "StopwordSet":
        return StopwordSet(self._words.difference(normalize_word(w) for w in words))

    def cleared(self) -> "StopwordSet":
        return StopwordSet()

    def with_standard(self, language: str) -> "StopwordSet":
        standard = get_standard_stopwords(language)
        if not standard:
            log.warning("No standard stopword list for language %r", language)
        merged = self.with_added(*standard)
        log.debug("Merged %d '%s' stopwords (%d -> %d)", len(standard), language, len(self), len(merged))
        return merged


# -----------------------
# Stopword files
# -----------------------
def parse_stopword_file(text: str) -> StopwordSet:
    """One word per line; blank lines and '#' comments are skipped."""
    words = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        words.append(line)
    return StopwordSet(words)


def format_stopword_file(words: Iterable[str]) -> str:
    return "\n".join(sorted(words))
