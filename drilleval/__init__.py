"""drilleval - Answer evaluation and exercise scoring for Arabic language drills.

Main namespace package:
- drilleval.text: Arabic normalization, grapheme units and lexicon tables
- drilleval.answer: Comparison, character diff, error classification, evaluators and retry hints
- drilleval.scoring: Multi-item scoring (cloze, category sort, sequence, free recall)
- drilleval.exercises: Exercise definitions (tagged by type)
- drilleval.engine: Exercise dispatch and outcomes
- drilleval.core: Configuration, logging and errors
"""

__version__ = "0.1.0"

__all__ = []
