"""
Auto-tagging by vocabulary substring match.

Tags are not word-bounded: "pen" is found in "open", "car" in "card".
Notes are tagged only with the fixed color and object vocabularies below.
"""

COLOR_TERMS: tuple[str, ...] = (
    "black",
    "white",
    "red",
    "blue",
    "green",
    "yellow",
    "grey",
    "gray",
    "brown",
    "purple",
    "orange",
    "pink",
)

OBJECT_TERMS: tuple[str, ...] = (
    "shoe",
    "bag",
    "shirt",
    "laptop",
    "phone",
    "book",
    "dress",
    "watch",
    "bottle",
    "pen",
    "car",
    "bike",
)


class TagExtractor:
    """Maps text to the deduplicated set of vocabulary terms it contains."""

    def __init__(
        self,
        colors: tuple[str, ...] = COLOR_TERMS,
        objects: tuple[str, ...] = OBJECT_TERMS,
    ):
        # dict.fromkeys keeps vocabulary order and drops duplicate terms
        self.vocabulary = list(dict.fromkeys(term.lower() for term in (*colors, *objects)))

    def extract(self, text: str) -> list[str]:
        """
        Return every vocabulary term contained in text.

        Args:
            text: Arbitrary text, possibly empty

        Returns:
            Unique lowercase tags in vocabulary order
        """
        if not text:
            return []
        lowered = text.lower()
        return [term for term in self.vocabulary if term in lowered]


_default_extractor = TagExtractor()


def extract_tags(text: str) -> list[str]:
    """Tag text with the default color and object vocabularies."""
    return _default_extractor.extract(text)
