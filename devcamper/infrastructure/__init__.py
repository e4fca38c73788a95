"""Infrastructure Layer — database, token verification, logging.

Invariants:
    - Infrastructure may import core/ types; core/ never imports infrastructure
    - Raw driver errors are not translated here, only logged and re-raised
"""
