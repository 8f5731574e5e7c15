"""
Benchmark suite for SDSL parsing performance.

Parses generated SDSL documents with sdsl and the equivalent JSON
documents with:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed and memory usage across document shapes.
"""
