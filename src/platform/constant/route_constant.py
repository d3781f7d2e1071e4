# API Route Constants

# Base API
API_BASE = '/api'

# User routes
USER_REGISTER = f'{API_BASE}/register'
USER_LOGIN = f'{API_BASE}/login'
USER_PROFILE = f'{API_BASE}/profile'

# Event routes (client surface)
EVENT_BASE = f'{API_BASE}/events'
EVENT_LIST = EVENT_BASE
EVENT_GET = f'{EVENT_BASE}/{{event_id}}'
EVENT_PURCHASE = f'{EVENT_BASE}/{{event_id}}/purchase'

# Admin routes
ADMIN_BASE = f'{API_BASE}/admin'
ADMIN_EVENT_CREATE = f'{ADMIN_BASE}/events'

# Booking assistant routes
LLM_PARSE = f'{API_BASE}/llm/parse'
ASSISTANT_MESSAGES = f'{API_BASE}/assistant/messages'
