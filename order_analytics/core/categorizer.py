"""
Product Categorizer

Assigns a category to a free-text product name by scoring its words against
the taxonomy keywords:
- exact keyword match: +1.0 for the keyword's category
- partial match (word contains keyword, or keyword contains word): +0.5

Both rules fire for an exact match, so an exact hit is worth 1.5 by default.
"""
import re
from typing import Dict, List, Optional

from .taxonomy import DEFAULT_TAXONOMY, OTHER_CATEGORY, Taxonomy

# Maximal runs of letters/digits, underscore excluded
TOKEN_PATTERN = re.compile(r'[^\W_]+')


def tokenize(text: Optional[str]) -> List[str]:
    """Lowercase and split a product name into word tokens"""
    if not text:
        return []
    return TOKEN_PATTERN.findall(text.lower())


class ProductCategorizer:
    """
    Keyword-scoring classifier over a fixed taxonomy
    """

    def __init__(self,
                 taxonomy: Taxonomy = DEFAULT_TAXONOMY,
                 exact_weight: float = 1.0,
                 partial_weight: float = 0.5):
        """
        Args:
            taxonomy: Category keywords and reverse index
            exact_weight: Score for a token equal to a keyword
            partial_weight: Score for each keyword overlapping a token as a substring
        """
        self.taxonomy = taxonomy
        self.exact_weight = exact_weight
        self.partial_weight = partial_weight

    def score(self, product_name: Optional[str]) -> Dict[str, float]:
        """
        Accumulate per-category scores for a product name

        Returns:
            Category -> score, only for categories that received credit
        """
        keyword_index = self.taxonomy.keyword_index
        scores: Dict[str, float] = {}

        for token in tokenize(product_name):
            # Exact match
            category = keyword_index.get(token)
            if category is not None:
                scores[category] = scores.get(category, 0.0) + self.exact_weight

            # Partial matches, including the exact keyword itself
            for keyword, category in keyword_index.items():
                if keyword in token or token in keyword:
                    scores[category] = scores.get(category, 0.0) + self.partial_weight

        return scores

    def classify(self, product_name: Optional[str]) -> str:
        """
        Categorize a product name

        Args:
            product_name: Free-text product name (may be empty or None)

        Returns:
            A taxonomy category, or 'Other' when nothing scores
        """
        scores = self.score(product_name)

        best_category = OTHER_CATEGORY
        best_score = 0.0

        # Taxonomy order makes ties deterministic
        for category in self.taxonomy.categories:
            score = scores.get(category, 0.0)
            if score > best_score:
                best_score = score
                best_category = category

        return best_category

    def get_categories(self) -> List[str]:
        """All labels this categorizer can return, fallback last"""
        return list(self.taxonomy.categories) + [OTHER_CATEGORY]


_default_categorizer = ProductCategorizer()


def detect_category(product_name: Optional[str]) -> str:
    """Categorize a product name with the built-in taxonomy"""
    return _default_categorizer.classify(product_name)
