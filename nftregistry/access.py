from contextlib import ContextDecorator

from nftregistry.exceptions import Forbidden
from nftregistry.logger import get_logger

log = get_logger('NFTRegistry.Access')


class AccessGuard(ContextDecorator):
    def __init__(self, admin, caller):
        self.admin = admin
        self.caller = caller

    def __enter__(self, *args, **kwargs):
        if self.admin is None or self.caller != self.admin:
            log.warning('Denied admin operation to {}'.format(self.caller))
            raise Forbidden(caller=self.caller)

        return self

    def __exit__(self, *args, **kwargs):
        return False
