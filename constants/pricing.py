"""
Pricing Constants

Fixed markups applied to per-tray cost plus packaging.
retail = (cost + packaging) * 2 * 1.3
store  = (cost + packaging) * 1.5 * 1.3
"""

RETAIL_MARKUP = 2
STORE_MARKUP = 1.5
MARGIN = 1.3
