from .benchmark import (
    Benchmark,
    BenchmarkCase,
    BenchmarkResult,
    SizeResult,
    generate_population,
    run_benchmark,
)

__all__ = [
    "Benchmark",
    "BenchmarkCase",
    "BenchmarkResult",
    "SizeResult",
    "generate_population",
    "run_benchmark",
]
