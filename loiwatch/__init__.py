"""
loiwatch – watches a published "locations of interest" page and reports changes.
"""
