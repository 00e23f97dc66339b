"""
Turns caller-facing references into durable identities.

A reference is either a durable identity already (a hex verifying key) or an
alias registered with a name service. The registry never resolves anything
itself: the executor resolves reference arguments before an operation runs,
and a failed resolution aborts the call before any state is touched.
"""
import re

from nftregistry import config
from nftregistry.db.driver import StateDriver
from nftregistry.db.orm import Hash
from nftregistry.exceptions import ResolutionError, InvalidKey
from nftregistry.logger import get_logger


class Resolver:
    def resolve(self, reference):
        raise NotImplementedError

    def __call__(self, reference):
        return self.resolve(reference)


class AddressResolver(Resolver):
    def __init__(self, pattern=config.IDENTITY_PATTERN):
        self.pattern = re.compile(pattern)

    def is_address(self, reference):
        return isinstance(reference, str) and self.pattern.match(reference) is not None

    def resolve(self, reference):
        if reference is config.NULL_IDENTITY:
            return config.NULL_IDENTITY

        if not self.is_address(reference):
            raise ResolutionError(reference=reference)

        return reference


class NameServiceResolver(Resolver):
    def __init__(self, driver: StateDriver, name=config.DEFAULT_NAME_SERVICE, addresses=None):
        self.driver = driver
        self.addresses = addresses or AddressResolver()
        self.names = Hash(name, 'aliases', driver=driver)
        self.log = get_logger('NFTRegistry.Resolver')

    def register(self, alias, identity):
        assert isinstance(alias, str) and alias != '', 'Alias must be a non-empty string.'
        assert not self.addresses.is_address(alias), 'Alias {} shadows an address.'.format(alias)

        self.names[alias] = self.addresses.resolve(identity)
        self.driver.commit()

        self.log.debug('Registered alias {} for {}'.format(alias, identity))

    def unregister(self, alias):
        del self.names[alias]
        self.driver.commit()

    def resolve(self, reference):
        if reference is config.NULL_IDENTITY or self.addresses.is_address(reference):
            return reference

        try:
            identity = self.names[reference]
        except InvalidKey:
            identity = None

        if identity is None:
            raise ResolutionError(reference=reference)

        return identity
