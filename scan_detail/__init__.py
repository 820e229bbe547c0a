"""
Detail-view core for barcode generation, FDA recall lookup and UPC lookup.
"""
