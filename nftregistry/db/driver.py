from nftregistry.db.encoder import encode, decode
from nftregistry import config
from nftregistry.logger import get_logger
from pathlib import Path
import json
import os
import re
import shutil
import pymongo

logger = get_logger('NFTRegistry.Driver')

# Storage drivers map strings to encoded bytes
# The cache driver maps strings to python objects


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        res = self.db.get(key)
        if res is None:
            return None
        return decode(res)

    def set(self, key: str, value):
        if value is None:
            self.__delitem__(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str, length=0):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())
            if 0 < length <= len(l):
                break

        return l

    def keys(self):
        return sorted([k.decode() for k in self.db.keys()])

    def flush(self):
        self.db.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        k = key.encode()
        try:
            del self.db[k]
        except KeyError:
            pass


class FSDriver:
    """
    Keeps one JSON document per collection under the storage root. Keys are
    split on the index separator: 'collection.owners:1' lives in the file
    'collection.json' under the variable 'owners:1'.
    """
    def __init__(self, root=None):
        self.root = Path(root) if root is not None else config.STORAGE_HOME
        logger.debug(f"Using root {self.root}")

        self.__build_directories()

    def __build_directories(self):
        self.root.mkdir(exist_ok=True, parents=True)

    def __parse_key(self, key):
        if config.INDEX_SEPARATOR in key:
            filename, variable = key.split(config.INDEX_SEPARATOR, 1)
        else:
            filename, variable = '__misc', key

        return filename, variable

    def __filename_to_path(self, filename):
        return self.root.joinpath(filename + config.STATE_FILE_EXT)

    def __get_files(self):
        return sorted(p.stem for p in self.root.glob('*' + config.STATE_FILE_EXT))

    def __load(self, filename):
        path = self.__filename_to_path(filename)
        if not path.is_file():
            return {}

        with open(path) as f:
            return json.load(f)

    def __dump(self, filename, data):
        path = self.__filename_to_path(filename)
        if not data:
            if path.is_file():
                path.unlink()
            return

        tmp = path.with_suffix(path.suffix + '.tmp')
        with open(tmp, 'w') as f:
            json.dump(data, f, sort_keys=True)
        os.replace(tmp, path)

    def __key_from(self, filename, variable):
        if filename == '__misc':
            return variable
        return filename + config.INDEX_SEPARATOR + variable

    def __getitem__(self, key):
        return self.get(key)

    def __setitem__(self, key, value):
        self.set(key, value)

    def __delitem__(self, key):
        self.delete(key)

    def get(self, item: str):
        filename, variable = self.__parse_key(item)
        return decode(self.__load(filename).get(variable))

    def set(self, key, value):
        if value is None:
            self.delete(key)
            return

        filename, variable = self.__parse_key(key)

        data = self.__load(filename)
        data[variable] = encode(value)
        self.__dump(filename, data)

    def delete(self, key):
        filename, variable = self.__parse_key(key)

        data = self.__load(filename)
        if data.pop(variable, None) is not None:
            self.__dump(filename, data)

    def iter(self, prefix="", length=0):
        keys = [key for key in self.keys() if key.startswith(prefix)]
        return keys if length == 0 else keys[:length]

    def keys(self):
        keys = []
        for filename in self.__get_files():
            keys.extend(self.__key_from(filename, variable) for variable in self.__load(filename).keys())

        keys.sort()
        return keys

    def flush(self):
        if self.root.is_dir():
            shutil.rmtree(self.root)

        self.__build_directories()


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str="mongodb://localhost:27017", db="nftregistry", collection="state"):
        self.client = pymongo.MongoClient(conn_str)
        self.db = self.client[db][collection]

    def get(self, item: str):
        v = self.db.find_one({"rawKey": item})
        if v is None:
            return None

        return decode(v["value"])

    def set(self, key, value):
        if value is None:
            self.delete(key)
            return

        self.db.update_one({"rawKey": key}, {"$set": {"value": encode(value)}}, upsert=True)

    def delete(self, key: str):
        self.db.delete_one({"rawKey": key})

    def iter(self, prefix: str, length=0):
        cur = self.db.find({"rawKey": {"$regex": "^{}".format(re.escape(prefix))}})

        keys = []
        for entry in cur:
            keys.append(entry["rawKey"])
            if 0 < length <= len(keys):
                break

        keys.sort()
        return keys

    def keys(self):
        k = []
        for entry in self.db.find({}):
            k.append(entry["rawKey"])
        k.sort()
        return k

    def flush(self):
        self.db.delete_many({})

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.delete(key)


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # None marks a pending delete
        self.driver = driver or InMemDriver()

    def find(self, key: str):
        if key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def get(self, key: str):
        return self.find(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def commit(self, keys=None):
        # Only the given keys are flushed when keys is set, the rest stays pending
        if keys is None:
            keys = list(self.pending_writes.keys())

        for k in keys:
            if k not in self.pending_writes:
                continue

            v = self.pending_writes.pop(k)
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

    def rollback(self):
        # Returns to disk state which should be whatever it was prior to any write sessions
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()


class StateDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def items(self, prefix=""):
        _items = {}
        seen = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                seen.add(k)
                if v is not None:
                    _items[k] = v

        for k in self.driver.iter(prefix=prefix):
            if k not in seen:
                v = self.driver.get(k)
                if v is not None:
                    _items[k] = v

        return dict(sorted(_items.items()))

    def keys(self, prefix=""):
        return list(self.items(prefix).keys())

    def values(self, prefix=""):
        return list(self.items(prefix).values())

    def make_key(self, contract, variable, args=[]):
        contract_variable = self.delimiter.join((contract, variable))
        if args:
            return config.DELIMITER.join((contract_variable, *[str(arg) for arg in args]))
        return contract_variable

    def get_var(self, contract, variable, arguments=[]):
        key = self.make_key(contract, variable, arguments)
        return self.get(key)

    def set_var(self, contract, variable, arguments=[], value=None):
        key = self.make_key(contract, variable, arguments)
        self.set(key, value)

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
