"""
Lookup Tables.

Read-only pattern and keyword tables used by the resolvers. Most entries
were collected from real labels and their OCR misreadings; new variants
are added here without touching resolver code.

Author: ML Engineering Team
"""

import re
from types import MappingProxyType
from typing import NamedTuple, Pattern, Tuple


class CanonicalPattern(NamedTuple):
    """A compiled regex mapped onto a canonical display name."""
    pattern: Pattern
    name: str


class BrandKeywords(NamedTuple):
    """Lowercase keyword variants mapped onto one brand display name."""
    keywords: Tuple[str, ...]
    name: str


def _patterns(*entries: Tuple[str, str]) -> Tuple[CanonicalPattern, ...]:
    return tuple(CanonicalPattern(re.compile(regex, re.IGNORECASE), name) for regex, name in entries)


# =============================================================================
# COURIERS
# =============================================================================

AMAZON_SHIPPING = 'Amazon Shipping'
DELHIVERY = 'Delhivery'
EKART = 'Ekart'

# Ordered: first match over the full label text wins
COURIER_PATTERNS = _patterns(
    (r'DELHIVERY', DELHIVERY),
    (r'DELHIV', DELHIVERY),
    (r'FEDEX', 'FedEx'),
    (r'DHL', 'DHL'),
    (r'BLUE\s*DART', 'Blue Dart'),
    (r'DTDC', 'DTDC'),
    (r'ECOM\s*EXPRESS', 'Ecom Express'),
    (r'XPRESS\s*BEES', 'Xpressbees'),
    (r'XYXPRESSEBEES', 'Xpressbees'),
    (r'PRESSEBEES', 'Xpressbees'),
    (r'>>XPRESS', 'Xpressbees'),
    (r'SHIP\s*ROCKET', 'Shiprocket'),
    (r'PICKRR', 'Pickrr'),
    (r'E\s*KART', EKART),
    (r'INDIA\s*POST', 'India Post'),
    (r'SPEED\s*POST', 'Speed Post'),
    (r'FIRST\s*FLIGHT', 'First Flight'),
    (r'PROFESSIONAL', 'Professional'),
    (r'SURFACE', 'Surface'),
    (r'AMAZON\s*SHIPPING', AMAZON_SHIPPING),
    (r'AMAZON\s*TRANSPORT', AMAZON_SHIPPING),
)

# Patterns trusted on logo OCR output (noisier than a text layer)
COURIER_LOGO_PATTERNS = _patterns(
    (r'XPRESS\s*BEES', 'Xpressbees'),
    (r'XYXPRESSEBEES', 'Xpressbees'),
    (r'PRESSEBEES', 'Xpressbees'),
    (r'>>XPRESS', 'Xpressbees'),
    (r'DELHIVERY', DELHIVERY),
    (r'DELHIV', DELHIVERY),
    (r'BLUE\s*DART', 'Blue Dart'),
    (r'DTDC', 'DTDC'),
    (r'ECOM\s*EXPRESS', 'Ecom Express'),
    (r'SHIP\s*ROCKET', 'Shiprocket'),
    (r'EKART', EKART),
    (r'AMAZON\s*SHIPPING', AMAZON_SHIPPING),
)

# Courier names as they appear on their own in the brand box
KNOWN_COURIER_NAMES = (
    'delhivery', 'fedex', 'dhl', 'bluedart', 'blue dart', 'dtdc',
    'ecom express', 'xpressbees', 'xpress bees',
    'shiprocket', 'ship rocket', 'pickrr', 'ekart', 'e kart',
    'india post', 'speed post', 'first flight', 'professional', 'gati', 'surface',
)

# ALL-CAPS header words that are never a courier
COURIER_STOPWORDS = frozenset({
    'COD', 'PIN', 'SKU', 'QTY', 'DATE', 'ORDER', 'INVOICE', 'TOTAL', 'PRICE',
    'RS', 'ADDRESS', 'DELIVER', 'TO', 'FROM', 'NUMBER', 'VALUE',
    'KART', 'SHOPPERS', 'ZEN', 'GOODS',
})

BRAND_INDICATOR = re.compile(r'\b(GOODS|STORE|SHOP|MART|BRAND|SHOPPERS|KART)\b', re.IGNORECASE)

# =============================================================================
# BRANDS
# =============================================================================

# Ordered by priority
KNOWN_BRANDS = (
    BrandKeywords(('shopperskart', 'shoppers kart', 'shoppers  kart'), 'SHOPPERS KART'),
    BrandKeywords(('dazara',), 'DAZARA'),
    BrandKeywords(('zen goods', 'zengoods'), 'ZEN GOODS'),
    BrandKeywords(('liveonease', 'live on ease'), 'LiveOnEase'),
)

INVOICE_PREFIX_BRANDS = MappingProxyType({
    'SK': 'SHOPPERS KART',
    'ZG': 'ZEN GOODS',
    'DZ': 'DAZARA',
    'LO': 'LiveOnEase',
})

WEBMAIL_DOMAINS = re.compile(r'gmail\.com|yahoo\.com|outlook\.com|hotmail\.com', re.IGNORECASE)

BRAND_SUFFIX = re.compile(r'\b(GOODS|BRAND|STORE|SHOP|MART|KART|INC|LLC|LTD)$', re.IGNORECASE)

BRAND_STOPWORDS = re.compile(
    r'^(COD|PIN|SKU|QTY|DATE|ORDER|INVOICE|TOTAL|PRICE|RS|ADDRESS|DELIVER|TO\b|FROM\b|NUMBER|VALUE)$',
    re.IGNORECASE
)

# Indian states/UTs and large cities
KNOWN_LOCATIONS = frozenset({
    'punjab', 'haryana', 'rajasthan', 'maharashtra', 'gujarat', 'bihar',
    'karnataka', 'kerala', 'telangana', 'andhra pradesh', 'tamil nadu',
    'uttar pradesh', 'madhya pradesh', 'west bengal', 'odisha', 'assam',
    'jharkhand', 'chhattisgarh', 'uttarakhand', 'himachal pradesh', 'goa',
    'tripura', 'meghalaya', 'manipur', 'nagaland', 'mizoram', 'arunachal pradesh',
    'sikkim', 'delhi', 'chandigarh', 'jammu', 'kashmir', 'ladakh',
    'mumbai', 'kolkata', 'chennai', 'bangalore', 'hyderabad', 'pune', 'jaipur',
    'lucknow', 'ahmedabad', 'surat', 'indore', 'bhopal', 'patna', 'india',
})

# A line made only of these words is an address or a person, not a brand
ADDRESS_WORDS = frozenset({
    'station', 'railway', 'masjid', 'nagar', 'road', 'street', 'lane', 'colony', 'building',
    'apartment', 'flat', 'house', 'floor', 'block', 'sector', 'plot', 'near',
    'opposite', 'behind', 'village', 'town', 'city', 'district', 'tehsil',
    'chowk', 'bazaar', 'market', 'gali', 'mohalla', 'ward', 'post', 'office',
    'temple', 'church', 'mosque', 'school', 'college', 'hospital', 'park',
    'garden', 'tower', 'complex', 'enclave', 'vihar', 'puram', 'abad',
    'centre', 'center', 'tiffin', 'resort', 'stop', 'bus', 'ghat',
    'address', 'shipping', 'deliver', 'invoice', 'order', 'product', 'price',
    'total', 'weight', 'dimensions', 'please', 'reach', 'complaints',
    'great', 'placed', 'barcode', 'sunti', 'kumar', 'singh', 'sharma',
    'nath', 'das', 'devi', 'ram', 'lal', 'prasad', 'lakshmi', 'gour',
    'mali', 'karan', 'charan',
})

# =============================================================================
# SHARED LINE SHAPES
# =============================================================================

WAREHOUSE_CODE = re.compile(r'^\([A-Z]{3}/[A-Z]{3}\)$')
BARCODE_LINE = re.compile(r'^\d{13,}$')

# =============================================================================
# PRODUCTS
# =============================================================================

# Footer codes printed under the marketplace item table
MARKETPLACE_FOOTER = re.compile(r'STVM|MSTA|MRJA|PTAF|amazon', re.IGNORECASE)

# Tokens the single-product fallback must never return
LEGACY_GARBAGE = re.compile(
    r'STVM|MSTA|MRJA|PTAF|amazon\s*shipping|M1B|F17|^pE[—\-_]*T?$',
    re.IGNORECASE
)

# OCR residue of a "pE—T" style barcode caption
PE_GARBAGE = re.compile(r'^pE[\s\-–—T]+|pE\s*\d+', re.IGNORECASE)

# =============================================================================
# ORDER NUMBERS / CUSTOMER NAMES
# =============================================================================

ORDER_KEYWORDS = frozenset({'SKU', 'QTY', 'DATE', 'INVOICE', 'NUMBER'})

MOBILE_PREFIXES = ('91', '0')

NON_NAME_KEYWORDS = re.compile(
    r'^(COD|PIN|SKU|QTY|DATE|ORDER|INVOICE|TOTAL|PRICE|ADDRESS|PHONE|MOBILE|EMAIL)\b',
    re.IGNORECASE
)

ADDRESS_BOUNDARY = re.compile(
    r'\s+(House|Floor|Flat|Block|Street|Road|Lane|Sector|Plot|Near|Opp|Behind|'
    r'Village|Dist|Tehsil|PO|Post)\b.*',
    re.IGNORECASE
)
