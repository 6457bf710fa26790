API_PREFIX = '/api'

PAYMENT_BASE = f'{API_PREFIX}/payment'
PAYMENT_GET = f'{PAYMENT_BASE}/{{payment_id}}'
PAYMENT_COMPLETE = f'{PAYMENT_BASE}/{{payment_id}}/complete'
PAYMENT_FAIL = f'{PAYMENT_BASE}/{{payment_id}}/fail'
PAYMENT_REFUND = f'{PAYMENT_BASE}/{{payment_id}}/refund'

PERFORMANCE_BASE = f'{API_PREFIX}/performance'
PERFORMANCE_GET = f'{PERFORMANCE_BASE}/{{performance_id}}'
PERFORMANCE_AVAILABLE_TICKETS = f'{PERFORMANCE_BASE}/{{performance_id}}/available_tickets'
PERFORMANCE_ADJUSTMENTS = f'{PERFORMANCE_BASE}/{{performance_id}}/adjustments'

ORDER_BASE = f'{API_PREFIX}/order'
ORDER_GET = f'{ORDER_BASE}/{{order_id}}'
ORDER_STATUS = f'{ORDER_BASE}/{{order_id}}/status'

TICKET_BASE = f'{API_PREFIX}/ticket'
TICKET_GET = f'{TICKET_BASE}/{{ticket_id}}'
TICKET_STATUS = f'{TICKET_BASE}/{{ticket_id}}/status'
TICKET_CANCEL = f'{TICKET_BASE}/cancel'
TICKET_CONFIRM_PAYMENT = f'{TICKET_BASE}/confirm_payment'
TICKET_PDF = f'{TICKET_BASE}/{{ticket_id}}/pdf'
TICKET_EMAIL = f'{TICKET_BASE}/{{ticket_id}}/email'
