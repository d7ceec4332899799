from stamp_health.adapters.redis.producer import RedisMessageProducer

__all__ = ["RedisMessageProducer"]
