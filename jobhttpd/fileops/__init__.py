"""File operations: sorting, counting, searching, compressing and hashing."""