# Pagination constants
DEFAULT_PAGE_SIZE = 9  # Activities revealed per scroll step

# Filter constants
FILTER_DEBOUNCE_MS = 300  # Quiet period before filters are applied, in milliseconds
LOAD_SETTLE_MS = 500  # Delay between a cursor advance and the new window, in milliseconds

# Navigation constants
LOCATION_QUERY_PARAM = "city"
