import hashlib
import threading
from concurrent.futures import ThreadPoolExecutor

from certificate_registry import AlreadyRegistered

from conftest import TEST_HASH


def test_concurrent_registration_of_one_hash(registry):
    workers = 32
    barrier = threading.Barrier(workers)

    def attempt(i):
        barrier.wait()
        try:
            registry.register_certificate(TEST_HASH, f"owner-{i}")
            return i
        except AlreadyRegistered:
            return None

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(attempt, range(workers)))

    winners = [r for r in results if r is not None]
    assert len(winners) == 1
    owner, _ = registry.get_certificate_owner(TEST_HASH)
    assert owner == f"owner-{winners[0]}"
    assert sum(registry.get_certificate_count(f"owner-{i}") for i in range(workers)) == 1


def test_concurrent_registration_of_distinct_hashes(registry):
    owners = ["A", "B", "C", "D"]

    def register_batch(owner):
        for i in range(50):
            cert_hash = hashlib.sha256(f"{owner}-{i}".encode()).hexdigest()
            registry.register_certificate(cert_hash, owner)

    threads = [threading.Thread(target=register_batch, args=(o,)) for o in owners]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(registry) == 200
    for owner in owners:
        assert registry.get_certificate_count(owner) == 50
