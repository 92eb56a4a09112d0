CACHE_EXPIRY_KEY = 'cache_expiry'

CACHE_KEY_PREFIX = 'vehicle_'

HISTORY_KEY = 'history'
