# Event & error codes
INVALID_LINKID = 'INVALID_LINKID'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_INPUT = 'INVALID_INPUT'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
INVALID_TOKEN = 'INVALID_TOKEN'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
LINK_UPDATED = 'LINK_UPDATED'
