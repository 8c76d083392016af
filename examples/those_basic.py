"""
those basic usage examples.
Run: python examples/those_basic.py
"""

import logging
import os
import sys
# Ensure project root is on sys.path for direct execution
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from those import those, Policy


def main():
    logging.basicConfig(level=logging.DEBUG if os.environ.get('THOSE_DEBUG') else logging.INFO)

    people = [
        {"name": "Alayna", "age": 9, "pets": ["cat"]},
        {"name": "Braylon", "age": 6, "pets": []},
        {"name": "David", "age": 35, "pets": ["dog", "cat"]},
    ]

    # Partial pattern and predicate search
    print("First Braylon:", those(people).first({"name": "Braylon"}))
    print("Adults:", those(people).like(lambda p: p["age"] >= 18).pluck("name"))
    print("Owns exactly a cat and a dog:", those(people).first({"pets": ["cat", "dog"]}))

    # Ordering returns the same sequence, so it chains into first()
    youngest = those(people).order("age").first()
    print("Youngest:", youngest)

    # Pop the oldest person out of a queryable copy
    oldest = []
    remaining = those(people).order("age").flip().flick(on_flick=oldest.extend)
    print("Oldest:", oldest[0])
    print("Still has youngest:", remaining.has(youngest), "| still has oldest:", remaining.has(oldest[0]))

    # Mapping values, natural ordering, min/max
    inventory = those({"b": {"sku": "item10", "qty": 4}, "a": {"sku": "item2", "qty": 9}})
    print("SKUs in order:", inventory.order("sku").pluck("sku"))
    print("Qty range:", inventory.min("qty"), "-", inventory.max("qty"))

    # Exact matching refuses partial patterns
    strict = those(people, Policy(matching="exact"))
    print("Exact has name-only pattern:", strict.has({"name": "David"}))
    print("Source untouched:", [p["name"] for p in people])


if __name__ == "__main__":
    main()
