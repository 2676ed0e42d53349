"""
Performance data extractor.

Measures a page in a headless browser and publishes derived timing metrics.
"""
