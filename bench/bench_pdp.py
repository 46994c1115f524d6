import argparse
import random
import statistics
import time

from vaultguard import Department, Guard, Resource, ResourceType, Role, SensitivityLevel, SystemState, User


def gen_cases(n: int, seed: int = 7) -> list:
    rnd = random.Random(seed)
    cases = []
    for i in range(n):
        user = User(
            id=f"u{i % 50}",
            role=rnd.choice(list(Role)),
            department=rnd.choice(list(Department)),
            clearance=rnd.choice(list(SensitivityLevel)),
        )
        res = Resource(
            id=f"r{i}",
            type=rnd.choice(list(ResourceType)),
            owner_id=f"u{rnd.randrange(50)}",
            sensitivity=rnd.choice(list(SensitivityLevel)),
            department=rnd.choice(list(Department)),
            acl=frozenset(f"u{rnd.randrange(50)}" for _ in range(rnd.randrange(4))),
        )
        state = SystemState(rnd.randrange(24), rnd.random() < 2 / 7)
        cases.append((user, res, state))
    return cases


def run(size: int, iters: int):
    guard = Guard()
    cases = gen_cases(size)
    lat = []
    granted = 0
    for _ in range(iters):
        for user, res, state in cases:
            t0 = time.perf_counter()
            rec = guard.evaluate_sync(user, res, state)
            lat.append((time.perf_counter() - t0) * 1000.0)
            granted += rec.granted
    return {
        "p50": statistics.median(lat),
        "avg": sum(lat) / len(lat),
        "p90": percentile(lat, 90),
        "grant_ratio": granted / len(lat),
    }


def percentile(arr, p):
    arr2 = sorted(arr)
    k = int(round((p / 100.0) * (len(arr2) - 1)))
    return arr2[k]


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sizes", type=int, nargs="+", default=[10, 100, 1000])
    ap.add_argument("--iters", type=int, default=20)
    args = ap.parse_args()
    print("size,avg_ms,p50_ms,p90_ms,grant_ratio")
    for s in args.sizes:
        r = run(s, args.iters)
        print(f"{s},{r['avg']:.4f},{r['p50']:.4f},{r['p90']:.4f},{r['grant_ratio']:.2f}")


if __name__ == "__main__":
    main()
