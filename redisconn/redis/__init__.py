"""redis-py integration: codecs, host lists and client construction."""
