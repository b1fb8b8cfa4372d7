"""
Product Taxonomy

Category labels and the keywords that identify them in free-text product names.
A Taxonomy is built once and is read-only afterwards; the categorizer scores
product names against its reverse keyword index.
"""
import json
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from order_analytics.utils.exceptions import TaxonomyError

OTHER_CATEGORY = 'Other'

# Declaration order is the tie-break order
DEFAULT_CATEGORY_KEYWORDS = {
    'Electronics': [
        'electronics', 'computer', 'laptop', 'desktop', 'monitor', 'keyboard', 'mouse',
        'cable', 'charger', 'adapter', 'usb', 'hdmi', 'display', 'screen', 'printer',
        'scanner', 'speaker', 'headphone', 'earphone', 'microphone', 'camera', 'phone',
        'smartphone', 'tablet', 'ipad', 'kindle', 'gadget', 'device', 'battery', 'power',
        'wireless', 'bluetooth', 'wifi', 'router', 'modem', 'network', 'storage', 'ssd',
        'hard drive', 'memory', 'ram', 'processor', 'cpu', 'gpu', 'graphics',
    ],
    'Books & Media': [
        'book', 'ebook', 'kindle', 'textbook', 'novel', 'magazine', 'journal', 'dvd',
        'blu-ray', 'cd', 'vinyl', 'record', 'movie', 'film', 'documentary', 'music',
        'album', 'audiobook', 'podcast', 'comic', 'manga', 'graphic novel',
    ],
    'Clothing & Fashion': [
        'clothing', 'clothes', 'shirt', 't-shirt', 'pants', 'jeans', 'dress', 'skirt',
        'jacket', 'coat', 'sweater', 'hoodie', 'sweatshirt', 'underwear', 'socks',
        'shoes', 'boots', 'sneakers', 'sandals', 'accessory', 'jewelry', 'watch',
        'bracelet', 'necklace', 'ring', 'earring', 'bag', 'purse', 'backpack', 'wallet',
        'belt', 'hat', 'cap', 'scarf', 'gloves', 'sunglasses',
    ],
    'Home & Kitchen': [
        'home', 'kitchen', 'appliance', 'furniture', 'bed', 'mattress', 'sofa', 'chair',
        'table', 'desk', 'cabinet', 'shelf', 'storage', 'organizer', 'decor', 'art',
        'picture', 'frame', 'light', 'lamp', 'cookware', 'utensil', 'dish', 'plate',
        'bowl', 'cup', 'glass', 'mug', 'cutlery', 'knife', 'fork', 'spoon', 'pan',
        'pot', 'bakeware', 'appliance', 'refrigerator', 'oven', 'microwave', 'toaster',
        'blender', 'mixer', 'coffee maker', 'kettle',
    ],
    'Beauty & Personal Care': [
        'beauty', 'cosmetic', 'makeup', 'skincare', 'facial', 'cleanser', 'moisturizer',
        'serum', 'cream', 'lotion', 'shampoo', 'conditioner', 'hair', 'styling',
        'perfume', 'cologne', 'fragrance', 'deodorant', 'soap', 'body wash', 'toothpaste',
        'dental', 'oral care', 'razor', 'shaving', 'grooming', 'nail', 'manicure',
        'pedicure', 'brush', 'comb', 'mirror',
    ],
    'Sports & Outdoors': [
        'sport', 'fitness', 'exercise', 'workout', 'gym', 'equipment', 'outdoor',
        'camping', 'hiking', 'backpacking', 'tent', 'sleeping bag', 'bike', 'bicycle',
        'cycling', 'running', 'jogging', 'yoga', 'pilates', 'dumbbell', 'weight',
        'resistance', 'ball', 'racket', 'club', 'fishing', 'hunting', 'golf', 'tennis',
        'basketball', 'football', 'soccer',
    ],
    'Toys & Games': [
        'toy', 'game', 'puzzle', 'board game', 'card game', 'video game', 'console',
        'controller', 'lego', 'building', 'construction', 'doll', 'action figure',
        'stuffed animal', 'plush', 'educational', 'learning', 'craft', 'art', 'coloring',
        'book', 'paint', 'drawing', 'model', 'kit',
    ],
    'Food & Grocery': [
        'food', 'grocery', 'snack', 'candy', 'chocolate', 'beverage', 'drink', 'water',
        'coffee', 'tea', 'juice', 'soda', 'alcohol', 'wine', 'beer', 'spirit', 'spice',
        'herb', 'condiment', 'sauce', 'dressing', 'cereal', 'breakfast', 'pasta',
        'rice', 'grain', 'canned', 'frozen', 'fresh', 'organic', 'natural',
    ],
    'Health & Medical': [
        'health', 'medical', 'medicine', 'supplement', 'vitamin', 'mineral', 'protein',
        'nutrition', 'diet', 'weight', 'fitness', 'exercise', 'first aid', 'bandage',
        'band-aid', 'ointment', 'cream', 'pill', 'capsule', 'tablet', 'syrup',
        'inhaler', 'brace', 'support', 'mobility', 'wheelchair', 'cane', 'walker',
    ],
    'Office & School': [
        'office', 'school', 'stationery', 'paper', 'notebook', 'pen', 'pencil',
        'marker', 'highlighter', 'folder', 'binder', 'organizer', 'desk', 'chair',
        'lamp', 'calculator', 'printer', 'ink', 'toner', 'cartridge', 'stapler',
        'scissors', 'tape', 'glue', 'clip', 'pin', 'rubber band', 'envelope',
    ],
}


class Taxonomy:
    """
    Immutable category -> keywords table with its reverse keyword index.

    A keyword listed under several categories belongs to the one declared last,
    so every keyword scores for exactly one category.
    """

    def __init__(self, category_keywords: Mapping[str, Iterable[str]]):
        """
        Args:
            category_keywords: Category label -> keywords, in tie-break order
        """
        categories: List[Tuple[str, Tuple[str, ...]]] = []
        index: Dict[str, str] = {}

        for category, keywords in category_keywords.items():
            label = str(category).strip()
            if not label:
                raise TaxonomyError("Category label cannot be empty")
            if label == OTHER_CATEGORY:
                raise TaxonomyError(f"'{OTHER_CATEGORY}' is reserved for unmatched products")
            if isinstance(keywords, str):
                raise TaxonomyError(f"Keywords for '{label}' must be a list, not a string")

            cleaned = tuple(kw.strip().lower() for kw in keywords if kw and kw.strip())
            categories.append((label, cleaned))
            for keyword in cleaned:
                index[keyword] = label

        if not categories:
            raise TaxonomyError("Taxonomy must define at least one category")

        self._categories = tuple(categories)
        self._keyword_index = MappingProxyType(index)
        self._order = MappingProxyType({label: i for i, (label, _) in enumerate(categories)})

    @property
    def categories(self) -> Tuple[str, ...]:
        """Category labels in declaration order (without the fallback)"""
        return tuple(label for label, _ in self._categories)

    @property
    def keyword_index(self) -> Mapping[str, str]:
        """Read-only keyword -> owning category"""
        return self._keyword_index

    def keywords_for(self, category: str) -> Tuple[str, ...]:
        for label, keywords in self._categories:
            if label == category:
                return keywords
        raise KeyError(category)

    def rank(self, category: str) -> int:
        """Declaration position; the fallback sorts after every real category"""
        return self._order.get(category, len(self._order))

    def to_dict(self) -> Dict[str, List[str]]:
        return {label: list(keywords) for label, keywords in self._categories}

    def __len__(self):
        return len(self._categories)

    def __repr__(self):
        return f"Taxonomy({len(self._categories)} categories, {len(self._keyword_index)} keywords)"


DEFAULT_TAXONOMY = Taxonomy(DEFAULT_CATEGORY_KEYWORDS)


def load_taxonomy_from_file(taxonomy_path: Union[str, Path]) -> Taxonomy:
    """
    Load a taxonomy JSON file

    Accepts either a plain mapping {"Category": ["keyword", ...]} or a wrapper
    {"categories": [{"name": "Category", "keywords": [...]}, ...]}.

    Raises:
        TaxonomyError: if the file is missing, not JSON, or has the wrong shape
    """
    taxonomy_path = Path(taxonomy_path)
    try:
        with open(taxonomy_path, encoding='utf-8') as f:
            raw_data = json.load(f)
    except FileNotFoundError as e:
        raise TaxonomyError(f"Taxonomy file not found: {taxonomy_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise TaxonomyError(f"Could not read taxonomy file {taxonomy_path}: {e}") from e

    # Extract categories from wrapper structure
    if isinstance(raw_data, dict) and 'categories' in raw_data:
        raw_taxonomy = raw_data['categories']
    else:
        raw_taxonomy = raw_data

    category_keywords: Dict[str, List[str]] = {}

    # Handle list format
    if isinstance(raw_taxonomy, list):
        for item in raw_taxonomy:
            if not isinstance(item, dict):
                raise TaxonomyError(f"Taxonomy entries must be objects, got: {item!r}")
            name = item.get('name', item.get('category', ''))
            keywords = item.get('keywords', [])
            if not isinstance(keywords, list):
                raise TaxonomyError(f"Keywords for '{name}' must be a list")
            category_keywords[name] = keywords

    # Handle dict format
    elif isinstance(raw_taxonomy, dict):
        for name, keywords in raw_taxonomy.items():
            if not isinstance(keywords, list):
                raise TaxonomyError(f"Keywords for '{name}' must be a list")
            category_keywords[name] = keywords

    else:
        raise TaxonomyError(f"Unsupported taxonomy format in {taxonomy_path}")

    for keywords in category_keywords.values():
        if not all(isinstance(kw, str) for kw in keywords):
            raise TaxonomyError("Keywords must be strings")

    return Taxonomy(category_keywords)
