class RegistryError(Exception):
    """
    The base exception for the registry. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class AlreadyExists(RegistryError):
    """
    Attempted to mint a token id that is currently owned

    :ivar token_id: The id of the token
    """
    fmt = "Token '{token_id}' already exists"


class NotFound(RegistryError):
    """
    The token has no owner, either because it was never
    minted or because it was burned

    :ivar token_id: The id of the token
    """
    fmt = "Token '{token_id}' does not exist"


class Unauthorized(RegistryError):
    """
    The caller is neither the owner, the approved address for
    the token, nor an operator approved by the owner

    :ivar caller: The identity of the caller
    :ivar token_id: The id of the token
    """
    fmt = "'{caller}' is not allowed to manage token '{token_id}'"


class Forbidden(RegistryError):
    """
    An admin-only operation was called by someone other than the admin

    :ivar caller: The identity of the caller
    """
    fmt = "'{caller}' is not the collection admin"


class OwnerMismatch(RegistryError):
    """
    The sender passed to a transfer is not the recorded owner

    :ivar token_id: The id of the token
    :ivar sender: The claimed owner
    :ivar owner: The recorded owner
    """
    fmt = "Token '{token_id}' is owned by '{owner}', not '{sender}'"


class InvalidDestination(RegistryError):
    """
    Tokens cannot be sent to the null identity

    :ivar token_id: The id of the token
    """
    fmt = "Token '{token_id}' cannot be sent to the null identity"


class ResolutionError(RegistryError):
    """
    A caller-facing reference could not be turned into a durable identity

    :ivar reference: The unresolved reference
    """
    fmt = "Could not resolve '{reference}' to an identity"


class InvalidKey(RegistryError):
    fmt = "Invalid key '{key}': {reason}"


class InvalidAmount(RegistryError):
    fmt = "Amount must be a positive integer, got '{amount}'"


class AdminLocked(RegistryError):
    """
    The admin of a collection is fixed when it is first created

    :ivar name: The name of the collection
    :ivar admin: The stored admin identity
    """
    fmt = "Collection '{name}' is administered by '{admin}'"
