"""
Unit tests: domain objects, pricing, slot bookkeeping and configuration,
each exercised in isolation with hand-written fakes.
"""
