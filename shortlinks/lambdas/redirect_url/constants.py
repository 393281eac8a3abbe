# Event & error codes
INVALID_LINKID = 'INVALID_LINKID'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
