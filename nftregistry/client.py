from nftregistry.db.driver import StateDriver
from nftregistry.execution.executor import Executor
from nftregistry.registry import TokenRegistry
from nftregistry.resolver import NameServiceResolver
from nftregistry import config


class RegistryClient:
    def __init__(self, signer,
                 driver=None,
                 resolver=None,
                 admin=None,
                 name=config.DEFAULT_COLLECTION):

        self.raw_driver = driver or StateDriver()
        self.signer = signer
        self.name = name
        self.resolver = resolver or NameServiceResolver(self.raw_driver)

        # The admin is resolved once, the stored identity is fixed from then on
        if admin is not None:
            admin = self.resolver.resolve(admin)

        self.registry = TokenRegistry(driver=self.raw_driver, admin=admin, name=name)
        self.executor = Executor(registry=self.registry, resolver=self.resolver)

        self.last_output = None

    def _call(self, func, signer=None, **kwargs):
        signer = signer or self.signer

        output = self.executor.execute(sender=signer, function_name=func, kwargs=kwargs)
        self.last_output = output

        if output['status_code'] == 1:
            raise output['result']

        return output['result']

    # Admin surface
    def mint(self, to, token_id, signer=None):
        return self._call('mint', signer=signer, to=to, token_id=token_id)

    def mint_sequential(self, to, count, signer=None):
        return self._call('mint_sequential', signer=signer, to=to, count=count)

    def burn(self, token_id, signer=None):
        return self._call('burn', signer=signer, token_id=token_id)

    # Owner / operator surface
    def approve(self, delegate, token_id, signer=None):
        return self._call('approve', signer=signer, delegate=delegate, token_id=token_id)

    def set_approval_for_all(self, operator, approved, signer=None):
        return self._call('set_approval_for_all', signer=signer, operator=operator, approved=approved)

    def transfer_from(self, sender, to, token_id, signer=None):
        return self._call('transfer_from', signer=signer, sender=sender, to=to, token_id=token_id)

    def transfer(self, to, token_id, signer=None):
        signer = signer or self.signer
        return self.transfer_from(sender=signer, to=to, token_id=token_id, signer=signer)

    # Queries
    def balance_of(self, owner):
        return self._call('balance_of', owner=owner)

    def owner_of(self, token_id):
        return self._call('owner_of', token_id=token_id)

    def get_approved(self, token_id):
        return self._call('get_approved', token_id=token_id)

    def is_approved_for_all(self, owner, operator):
        return self._call('is_approved_for_all', owner=owner, operator=operator)

    def token_count(self):
        return self._call('token_count')

    def total_supply(self):
        return self._call('total_supply')

    def exists(self, token_id):
        return self._call('exists', token_id=token_id)

    def tokens_of(self, owner):
        return self._call('tokens_of', owner=owner)

    def get_var(self, variable, arguments=[]):
        return self.raw_driver.get_var(self.name, variable, arguments)
