# keyword_scout/pipeline/__init__.py
"""Per-site task pipeline and the bounded scheduler that runs it."""
