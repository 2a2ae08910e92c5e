"""Quote source adapters and raw payload parsing.

Modules placed here talk to the upstream quote provider (or serve fixtures)
and turn the provider's chart payload into :class:`RawQuotePoint` sequences for
the normalizer in :mod:`stockdash.market`.
"""

__all__: list[str] = []
