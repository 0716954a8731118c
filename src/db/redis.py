from redis.asyncio import Redis


def create_redis(url: str) -> Redis:
    """Redis client with str responses. Connections are opened lazily."""
    return Redis.from_url(url, decode_responses=True)


async def close_redis(client: Redis | None) -> None:
    if client is not None:
        await client.aclose()
