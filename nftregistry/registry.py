from nftregistry import config
from nftregistry.access import AccessGuard
from nftregistry.db.driver import StateDriver
from nftregistry.db.orm import Variable, Hash
from nftregistry.exceptions import AlreadyExists, NotFound, Unauthorized, OwnerMismatch, InvalidDestination, \
    InvalidAmount, AdminLocked
from nftregistry.logger import get_logger


def export(*references, caller=True):
    """
    Marks a registry method as callable through the executor.

    :param references: names of the keyword arguments that hold caller-facing
                       references and must be resolved before the call
    :param caller: whether the authenticated caller is passed as `caller`
    """
    def decorator(f):
        setattr(f, config.EXPORT_ATTRIBUTE, {
            'references': references,
            'caller': caller
        })
        return f
    return decorator


def is_null(identity):
    return identity is config.NULL_IDENTITY or identity == ''


class TokenRegistry:
    def __init__(self, driver: StateDriver=None, admin=None, name=config.DEFAULT_COLLECTION):
        self.driver = driver or StateDriver()
        self.name = name
        self.log = get_logger('NFTRegistry.Registry')

        # Drained by the executor after every call
        self.events = []

        self._admin = Variable(name, config.ADMIN_KEY, driver=self.driver)
        self._token_count = Variable(name, config.TOKEN_COUNT, driver=self.driver, t=int, default_value=0)
        self._supply = Variable(name, config.SUPPLY, driver=self.driver, t=int, default_value=0)

        self.owners = Hash(name, config.OWNERS, driver=self.driver)
        self.balances = Hash(name, config.BALANCES, driver=self.driver, default_value=0)
        self.approvals = Hash(name, config.APPROVALS, driver=self.driver)
        self.operators = Hash(name, config.OPERATORS, driver=self.driver, default_value=False)

        stored = self._admin.get()
        if stored is None:
            if is_null(admin):
                raise AdminLocked(name=name, admin=None)

            self._admin.set(admin)
            self.driver.commit(keys=[self._admin._key])
        elif admin is not None and admin != stored:
            raise AdminLocked(name=name, admin=stored)

    @property
    def admin(self):
        return self._admin.get()

    def _emit(self, event, **data):
        self.events.append({'event': event, 'data': data})

    def _owner(self, token_id):
        owner = self.owners[token_id]
        if owner is None:
            raise NotFound(token_id=token_id)
        return owner

    def _check_identity(self, identity):
        # Identities are balance keys, reading one raises InvalidKey before any write
        self.balances[identity]

    def _insert(self, to, token_id):
        self.owners[token_id] = to
        self.balances[to] += 1
        self._supply.set(self._supply.get() + 1)

        self._emit('Transfer', sender=None, to=to, token_id=token_id)

    def _is_authorized(self, caller, owner, token_id):
        if is_null(caller):
            return False

        return caller == owner or \
            caller == self.approvals[token_id] or \
            self.operators[owner, caller] is True

    @export('to')
    def mint(self, caller, to, token_id):
        with AccessGuard(self.admin, caller):
            token_id = str(token_id)

            if self.owners[token_id] is not None:
                raise AlreadyExists(token_id=token_id)

            if is_null(to):
                raise InvalidDestination(token_id=token_id)

            self._check_identity(to)
            self._insert(to, token_id)
            self.log.debug('Minted {} to {}'.format(token_id, to))

    @export('to')
    def mint_sequential(self, caller, to, count):
        with AccessGuard(self.admin, caller):
            if not isinstance(count, int) or isinstance(count, bool) or count < 1:
                raise InvalidAmount(amount=count)

            start = self._token_count.get()
            token_ids = [str(i) for i in range(start, start + count)]

            if is_null(to):
                raise InvalidDestination(token_id=token_ids[0])

            self._check_identity(to)

            # Reserve the whole range before inserting anything
            for token_id in token_ids:
                if self.owners[token_id] is not None:
                    raise AlreadyExists(token_id=token_id)

            for token_id in token_ids:
                self._insert(to, token_id)

            self._token_count.set(start + count)
            self.log.debug('Minted {}..{} to {}'.format(token_ids[0], token_ids[-1], to))

            return token_ids

    @export()
    def burn(self, caller, token_id):
        with AccessGuard(self.admin, caller):
            token_id = str(token_id)
            owner = self._owner(token_id)

            self.balances[owner] -= 1
            self._supply.set(self._supply.get() - 1)

            del self.owners[token_id]
            del self.approvals[token_id]

            self._emit('Transfer', sender=owner, to=None, token_id=token_id)
            self.log.debug('Burned {} owned by {}'.format(token_id, owner))

    @export('owner', caller=False)
    def balance_of(self, owner):
        if is_null(owner):
            return 0
        return self.balances[owner]

    @export(caller=False)
    def owner_of(self, token_id):
        return self._owner(str(token_id))

    @export('delegate')
    def approve(self, caller, delegate, token_id):
        token_id = str(token_id)
        owner = self._owner(token_id)

        if is_null(caller) or (caller != owner and self.operators[owner, caller] is not True):
            raise Unauthorized(caller=caller, token_id=token_id)

        if is_null(delegate):
            del self.approvals[token_id]
            delegate = None
        else:
            self.approvals[token_id] = delegate

        self._emit('Approval', owner=owner, approved=delegate, token_id=token_id)

    @export('operator')
    def set_approval_for_all(self, caller, operator, approved):
        self.operators[caller, operator] = bool(approved)

        self._emit('ApprovalForAll', owner=caller, operator=operator, approved=bool(approved))

    @export('owner', 'operator', caller=False)
    def is_approved_for_all(self, owner, operator):
        return self.operators[owner, operator] is True

    @export(caller=False)
    def get_approved(self, token_id):
        token_id = str(token_id)
        self._owner(token_id)
        return self.approvals[token_id]

    @export('sender', 'to')
    def transfer_from(self, caller, sender, to, token_id):
        token_id = str(token_id)
        owner = self._owner(token_id)

        if not self._is_authorized(caller, sender, token_id):
            raise Unauthorized(caller=caller, token_id=token_id)

        if owner != sender:
            raise OwnerMismatch(token_id=token_id, sender=sender, owner=owner)

        if is_null(to):
            raise InvalidDestination(token_id=token_id)

        self._check_identity(to)

        self.balances[sender] -= 1
        self.balances[to] += 1
        self.owners[token_id] = to
        del self.approvals[token_id]

        self._emit('Transfer', sender=sender, to=to, token_id=token_id)
        self.log.debug('Transferred {} from {} to {}'.format(token_id, sender, to))

    @export(caller=False)
    def token_count(self):
        return self._token_count.get()

    @export(caller=False)
    def total_supply(self):
        return self._supply.get()

    @export(caller=False)
    def exists(self, token_id):
        return self.owners[str(token_id)] is not None

    @export('owner', caller=False)
    def tokens_of(self, owner):
        return sorted(token_id for token_id, o in self.owners.items().items() if o == owner)
