# API Route Constants

# Event routes
EVENT_BASE = '/events'
EVENT_LIST = EVENT_BASE
EVENT_GET = f'{EVENT_BASE}/{{event_id}}'
EVENT_SPOTS = f'{EVENT_BASE}/{{event_id}}/spots'
EVENT_SPOTS_RESERVE = f'{EVENT_BASE}/{{event_id}}/reserve'

# System routes
HEALTH = '/health'
METRICS = '/metrics'
