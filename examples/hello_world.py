"""
service_variables — Hello World

Declare typed variables once, then read and write them anywhere.
Runs against an in-memory store; swap in ``RedisHashStore.from_url``
to share the variables between processes.
"""

from service_variables import InvalidValueError, Namespace, StoreConnectionError
from service_variables.stores import InMemoryHashStore


class OutageStore(InMemoryHashStore):
    """In-memory store whose reads can be switched off."""

    down = False

    def hash_get(self, key, field):
        if self.down:
            raise StoreConnectionError("hash_get", "store is down")
        return super().hash_get(key, field)


def main():
    store = OutageStore()

    # ──────────────────────────────────────
    #  1. Configure a namespace and declare its options
    # ──────────────────────────────────────
    flags = Namespace(store, key_suffix="checkout", failure_policy="use_last_value")

    maintenance = flags.boolean_option("maintenance", default=False)
    batch_size = flags.integer_option("batch_size", default=5, min=1, max=10)
    fee_ratio = flags.float_option("fee_ratio", default=0.02, min=0.0, max=0.5)
    region = flags.string_option(
        "region", default="eu", enum=["eu", "us"], failure_policy="raise"
    )

    # ──────────────────────────────────────
    #  2. Defaults until something is written
    # ──────────────────────────────────────
    print("=== Defaults ===\n")
    for name in flags.options():
        print(f"  {name} = {flags.get(name)!r}")

    # ──────────────────────────────────────
    #  3. Validated writes
    # ──────────────────────────────────────
    print("\n=== Writes ===\n")
    batch_size.set(8)
    fee_ratio.set("0.05")
    maintenance.set(True)
    print(f"  batch_size = {batch_size.get()}  fee_ratio = {fee_ratio.get()}")

    for name, value in [("batch_size", 42), ("region", "apac"), ("maintenance", "yes")]:
        try:
            flags.set(name, value)
        except InvalidValueError as e:
            print(f"  rejected {name}={value!r}: {e}")

    # ──────────────────────────────────────
    #  4. Store outage
    # ──────────────────────────────────────
    print("\n=== Outage ===\n")
    store.down = True
    print(f"  batch_size (last value) = {batch_size.get()}")
    try:
        region.get()
    except StoreConnectionError as e:
        print(f"  region (raise): {e}")

    print("\nNamespace JSON: ", flags.export())


if __name__ == "__main__":
    main()
