"""Search engine layer — Pluggable drivers for the model search abstraction.

Built-in engines:
  - elasticsearch: Elasticsearch v8+ (wildcard partial matching)

Implement ``SearchEngine`` and register a factory with ``EngineManager``
to connect another backend.
"""
