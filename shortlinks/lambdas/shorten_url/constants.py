# Event & error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_INPUT = 'INVALID_INPUT'
ALLOCATION_EXHAUSTED = 'ALLOCATION_EXHAUSTED'
LINK_WRITE_FAILED = 'LINK_WRITE_FAILED'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
LINK_CREATED = 'LINK_CREATED'
