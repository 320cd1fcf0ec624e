import timeit
from chordmap.transpose import resolve_chord_map

def run_benchmark():
    # Warmup
    resolve_chord_map(0)

    setup = """
from chordmap.transpose import resolve_chord_map
    """

    stmt = """
for key in range(12):
    resolve_chord_map(key)
    """

    times = timeit.repeat(stmt, setup, number=100, repeat=5)
    print(f"Baseline (min of 5 runs, 100 loops over 12 keys): {min(times):.5f} seconds")

if __name__ == '__main__':
    run_benchmark()
