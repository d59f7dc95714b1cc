"""Test suite for scenecue.

Test Structure:
- unit/: Unit tests for individual components
  - scheduling/: Timer queue and asyncio adapter
  - sequencer/: Document models, registry and player
  - project/: Project records and library
  - config/, utils/, tracing/, cli/: Ambient infrastructure
"""
