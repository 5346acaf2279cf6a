#!/usr/bin/env python3
"""
Synthetic dataset generator for user graph benchmarks.

Generates a newline-delimited JSON transaction file in the collector's format
(``{"inputs": [[address, value], ...], "outputs": [...]}``). Addresses are
owned by a fixed number of entities; each transaction spends one to
``--max-inputs`` addresses of a single entity, so the expected clustering is
known up front.

WARNING: memory use of the user graph builder grows with the number of
unique addresses. Start small (entities=10000) before scaling up.
"""

import argparse
import json
import random
import sys

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB


def entity_addresses(entity: int, addresses_per_entity: int) -> list[str]:
    """Deterministic address names for one entity."""
    return [f"E{entity:07d}_{i:03d}" for i in range(addresses_per_entity)]


def generate_transaction(
    num_entities: int,
    addresses_per_entity: int,
    max_inputs: int,
    max_outputs: int,
    coinbase_rate: float,
    rng: random.Random,
) -> dict[str, list[list[object]]]:
    """
    Generate one transaction record.

    Inputs always come from a single entity. Outputs go to random entities;
    one of them is change back to the spender.
    """
    spender = rng.randrange(num_entities)
    spender_addresses = entity_addresses(spender, addresses_per_entity)

    if rng.random() < coinbase_rate:
        reward = round(rng.uniform(1.0, 50.0), 8)
        return {
            "inputs": [["coinbase", reward]],
            "outputs": [[rng.choice(spender_addresses), reward]],
        }

    num_inputs = rng.randint(1, min(max_inputs, addresses_per_entity))
    inputs = [
        [address, round(rng.uniform(0.001, 10.0), 8)]
        for address in rng.sample(spender_addresses, num_inputs)
    ]
    total = sum(value for _, value in inputs)

    num_outputs = rng.randint(1, max_outputs)
    outputs = []
    remaining = total
    for _ in range(num_outputs - 1):
        payee = rng.randrange(num_entities)
        value = round(rng.uniform(0.0, remaining / 2), 8)
        remaining -= value
        outputs.append([rng.choice(entity_addresses(payee, addresses_per_entity)), value])
    # Change output.
    outputs.append([rng.choice(spender_addresses), round(remaining, 8)])

    return {"inputs": inputs, "outputs": outputs}


def generate_synthetic_dataset(
    output_path: str,
    num_transactions: int,
    num_entities: int,
    addresses_per_entity: int,
    max_inputs: int,
    max_outputs: int,
    coinbase_rate: float,
    seed: int,
) -> int:
    """
    Generate a synthetic transaction file.

    Streams output line-by-line to avoid memory issues.

    Returns:
        Total number of lines written.
    """
    rng = random.Random(seed)
    total_lines = 0

    with open(output_path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as f:
        for t in range(num_transactions):
            record = generate_transaction(
                num_entities,
                addresses_per_entity,
                max_inputs,
                max_outputs,
                coinbase_rate,
                rng,
            )
            f.write(json.dumps(record, separators=(",", ":")) + "\n")
            total_lines += 1

            # Progress indicator every 100000 transactions
            if (t + 1) % 100000 == 0:
                print(f"  Generated {t + 1}/{num_transactions} transactions...", file=sys.stderr)

    return total_lines


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate synthetic JSON-lines transaction dataset.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One million transactions across 50k entities
  python generate_synthetic_transactions.py --out outputs/transactions-synthetic.txt

  # Heavier co-spending (larger input sets)
  python generate_synthetic_transactions.py --out outputs/transactions-heavy.txt --max-inputs 8
""",
    )

    parser.add_argument(
        "--out",
        required=True,
        help="Output file path",
    )
    parser.add_argument(
        "--transactions",
        type=int,
        default=1000000,
        help="Number of transactions (default: 1000000)",
    )
    parser.add_argument(
        "--entities",
        type=int,
        default=50000,
        help="Number of address-owning entities (default: 50000)",
    )
    parser.add_argument(
        "--addresses-per-entity",
        type=int,
        default=8,
        help="Addresses owned by each entity (default: 8)",
    )
    parser.add_argument(
        "--max-inputs",
        type=int,
        default=3,
        help="Maximum inputs per transaction (default: 3)",
    )
    parser.add_argument(
        "--max-outputs",
        type=int,
        default=3,
        help="Maximum outputs per transaction (default: 3)",
    )
    parser.add_argument(
        "--coinbase-rate",
        type=float,
        default=0.01,
        help="Fraction of coinbase transactions (default: 0.01)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    # Validate
    if args.entities < 1:
        parser.error("--entities must be at least 1")
    if args.addresses_per_entity < 1:
        parser.error("--addresses-per-entity must be at least 1")
    if args.max_inputs < 1 or args.max_outputs < 1:
        parser.error("--max-inputs and --max-outputs must be at least 1")
    if not 0.0 <= args.coinbase_rate <= 1.0:
        parser.error("--coinbase-rate must be between 0 and 1")

    # Approximate line length: ~40 chars per input/output
    approx_size_mb = (args.transactions * 40 * (args.max_inputs + args.max_outputs) / 2) / (1024 * 1024)

    print("=" * 60, file=sys.stderr)
    print("Synthetic Transaction Dataset Generator", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Transactions: {args.transactions:,}", file=sys.stderr)
    print(f"Entities: {args.entities:,}", file=sys.stderr)
    print(f"Addresses per entity: {args.addresses_per_entity}", file=sys.stderr)
    print(f"Max inputs/outputs: {args.max_inputs}/{args.max_outputs}", file=sys.stderr)
    print(f"Coinbase rate: {args.coinbase_rate}", file=sys.stderr)
    print(f"Seed: {args.seed}", file=sys.stderr)
    print(f"Estimated size: ~{approx_size_mb:.1f} MB", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(file=sys.stderr)

    print("Generating...", file=sys.stderr)
    total_lines = generate_synthetic_dataset(
        output_path=args.out,
        num_transactions=args.transactions,
        num_entities=args.entities,
        addresses_per_entity=args.addresses_per_entity,
        max_inputs=args.max_inputs,
        max_outputs=args.max_outputs,
        coinbase_rate=args.coinbase_rate,
        seed=args.seed,
    )

    print(file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Done! Wrote {total_lines:,} lines to {args.out}", file=sys.stderr)
    print("=" * 60, file=sys.stderr)


if __name__ == "__main__":
    main()
