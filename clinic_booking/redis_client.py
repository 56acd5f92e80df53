# clinic_booking/redis_client.py

from redis import Redis

from .config import settings

# None when REDIS_URL is not configured: rate limiting is then disabled.
# from_url does not connect until the first command.
redis_client: Redis | None = (
    Redis.from_url(settings.redis_url, decode_responses=True, socket_timeout=2.0)
    if settings.redis_url
    else None
)
