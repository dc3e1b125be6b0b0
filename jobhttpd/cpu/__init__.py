"""CPU-bound computations: primality, factoring, pi, matrices and fractals."""