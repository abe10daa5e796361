import redis

from bigbasket.utils.retry import redis_retry
from bigbasket.utils.settings import REDIS_URL
from bigbasket.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL


class LockService:
    """
    -blokada checkoutu klienta (jeden rachunek naraz)
    -zwalnianie locka tylko przez wlasciciela tokenu
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(customer_id: int) -> str:
        return f"checkout:{customer_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, customer_id: int, token: str, ttl: int) -> bool:
        key = self._key(customer_id)
        logger.info(f"Acquire lock {key}")
        #SET checkout:1:lock "<token>" NX EX 30
        return bool(self.redis.set(
            name=key,
            value=token,
            nx=True, #tylko gdy klucz nie istnieje
            ex=ttl, #wygasa sam, nie trzeba recznie czyscic
        ))

    @redis_retry()
    def release_checkout_lock(self, customer_id: int, token: str) -> bool:
        key = self._key(customer_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
