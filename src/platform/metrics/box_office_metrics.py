from prometheus_client import Counter, Gauge, Histogram


class BoxOfficeMetrics:
    """
    Box office core metrics

    Purchase outcomes, inventory movements and ticket delivery. Exposed on
    /metrics by the app factory.
    """

    def __init__(self):
        # ========== Purchase Workflow ==========
        self.purchase_requests = Counter(
            'box_office_purchase_requests_total',
            'Purchase workflow executions',
            ['result'],  # result: success/seat_unavailable/insufficient_inventory/conflict/error
        )

        self.purchase_duration = Histogram(
            'box_office_purchase_duration_seconds',
            'Purchase workflow duration including retries',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
        )

        self.seat_conflicts = Counter(
            'box_office_seat_conflicts_total', 'Requested seats found already held'
        )

        self.tickets_issued = Counter(
            'box_office_tickets_issued_total', 'Tickets created', ['status']
        )

        # ========== Inventory ==========
        self.inventory_adjustments = Counter(
            'box_office_inventory_adjustments_total',
            'Changes to available_tickets',
            ['kind'],
        )

        self.available_tickets = Gauge(
            'box_office_available_tickets',
            'Last observed available tickets per performance',
            ['performance_id'],
        )

        # ========== Delivery ==========
        self.delivery_jobs = Counter(
            'box_office_delivery_jobs_total',
            'Ticket delivery jobs',
            ['kind', 'result'],  # result: sent/failed/dropped
        )

    # ========== Helper Methods ==========

    def record_purchase(self, *, result: str, duration: float, tickets: int = 0):
        self.purchase_requests.labels(result=result).inc()
        self.purchase_duration.observe(duration)
        if tickets:
            self.tickets_issued.labels(status='purchased').inc(tickets)

    def record_inventory_change(self, *, performance_id: int, kind: str, available: int):
        self.inventory_adjustments.labels(kind=kind).inc()
        self.available_tickets.labels(performance_id=str(performance_id)).set(available)

    def record_delivery(self, *, kind: str, result: str):
        self.delivery_jobs.labels(kind=kind, result=result).inc()


# Global metrics instance
metrics = BoxOfficeMetrics()
