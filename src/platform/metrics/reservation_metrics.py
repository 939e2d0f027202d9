from prometheus_client import Counter, Histogram


# event_id label for requests naming an event that does not exist
UNKNOWN_EVENT_LABEL = 'unknown'


class ReservationMetrics:
    """Spot reservation business metrics, exposed on /metrics."""

    def __init__(self):
        self.spot_reservation_requests = Counter(
            'spot_reservation_requests_total',
            'Total spot reservation requests',
            ['event_id', 'result'],  # result: success/not_found/already_reserved
        )

        self.spot_reservation_duration = Histogram(
            'spot_reservation_duration_seconds',
            'Spot reservation processing time (validation + commit)',
            ['event_id'],
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

        self.spots_reserved = Counter(
            'spots_reserved_total',
            'Spots moved from available to reserved',
            ['event_id'],
        )

    def record_spot_reservation(
        self, *, event_id: int | str, result: str, duration: float, reserved_count: int = 0
    ):
        self.spot_reservation_requests.labels(event_id=event_id, result=result).inc()
        self.spot_reservation_duration.labels(event_id=event_id).observe(duration)
        if reserved_count:
            self.spots_reserved.labels(event_id=event_id).inc(reserved_count)


# Global metrics instance
metrics = ReservationMetrics()
