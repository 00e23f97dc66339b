from nftregistry import config
from nftregistry.logger import get_logger
from nftregistry.registry import TokenRegistry
from copy import deepcopy
import threading
import traceback

log = get_logger('NFTRegistry.Executor')


class Executor:
    def __init__(self, registry: TokenRegistry, resolver=None, auto_commit=True):
        self.registry = registry
        self.driver = registry.driver
        self.resolver = resolver
        self.auto_commit = auto_commit

        # One operation at a time per registry, including its resolution
        self.lock = threading.RLock()

    def get_function(self, function_name):
        assert not function_name.startswith(config.PRIVATE_METHOD_PREFIX), 'Private method not callable.'

        func = getattr(self.registry, function_name, None)
        assert func is not None and hasattr(func, config.EXPORT_ATTRIBUTE), \
            'Function {} is not exported.'.format(function_name)

        return func, getattr(func, config.EXPORT_ATTRIBUTE)

    def resolve(self, references, kwargs):
        if self.resolver is None:
            return kwargs

        for name in references:
            if name in kwargs:
                kwargs[name] = self.resolver.resolve(kwargs[name])

        return kwargs

    def execute(self, sender, function_name, kwargs=None, auto_commit=None) -> dict:
        kwargs = dict(kwargs or {})

        if auto_commit is None:
            auto_commit = self.auto_commit

        with self.lock:
            self.registry.events = []
            writes = {}
            pending = dict(self.driver.pending_writes)

            try:
                func, export = self.get_function(function_name)
                kwargs = self.resolve(export['references'], kwargs)

                if export['caller']:
                    kwargs['caller'] = sender

                result = func(**kwargs)
                status_code = 0

                writes = deepcopy(self.driver.pending_writes)
                if auto_commit:
                    self.driver.commit()

                events = self.registry.events
            except Exception as e:
                result = e
                status_code = 1
                events = []

                log.error(str(e))
                log.debug(traceback.format_exc())

                # Drop whatever the failed call wrote, keep earlier uncommitted work
                self.driver.pending_writes.clear()
                self.driver.pending_writes.update(pending)

            self.registry.events = []

        output = {
            'status_code': status_code,
            'result': result,
            'events': events,
            'writes': writes,
        }

        return output
