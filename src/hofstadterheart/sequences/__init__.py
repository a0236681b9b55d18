from .engine import HofstadterSequences, SequenceTables, A_SEEDS, Q_SEEDS, UNCOMPUTED
