# Event & error codes
INVALID_LINKID = 'INVALID_LINKID'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
INVALID_TOKEN = 'INVALID_TOKEN'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
LINK_DELETED = 'LINK_DELETED'
