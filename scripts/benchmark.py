import time, argparse
# Ensure project root is on PYTHONPATH so 'csv2json' package is importable
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from csv2json.options import InputSpec
from csv2json.pipeline import run_pipeline

def build_large_sample(csv_in="samples/sample_small.csv", rows=20000, out_csv="samples/large.csv"):
    with open(csv_in, "r", encoding="utf-8") as fh:
        header = fh.readline().strip()
        lines = [l.strip() for l in fh if l.strip()]
    with open(out_csv, "w", encoding="utf-8", newline="") as out:
        out.write(header + "\n")
        for i in range(rows):
            out.write(lines[i % len(lines)] + "\n")
    return out_csv

def time_conversion(csv_path, pretty):
    start = time.time()
    result = run_pipeline(InputSpec(Path(csv_path), pretty=pretty))
    return time.time() - start, result

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simple benchmark: compact vs pretty CSV -> JSON conversion")
    parser.add_argument("--rows", type=int, default=20000, help="number of rows to generate")
    args = parser.parse_args()

    print("Building large CSV with rows =", args.rows)
    large_csv = build_large_sample(rows=args.rows)
    print("Large CSV created:", large_csv)

    compact_time, result = time_conversion(large_csv, pretty=False)
    size = result.output_path.stat().st_size
    print(f"Compact: {compact_time:.3f}s, records={result.records_written}, bytes={size}")

    pretty_time, result = time_conversion(large_csv, pretty=True)
    size = result.output_path.stat().st_size
    print(f"Pretty:  {pretty_time:.3f}s, records={result.records_written}, bytes={size}")
