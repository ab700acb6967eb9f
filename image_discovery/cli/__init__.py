"""Command-line entry point: ``python -m image_discovery.cli``.

Heavy imports (providers, the openai client) are deferred inside
functions so ``--help`` stays fast.
"""
