"""Student scoring engine.

Sub-modules:
- scoring        – rounding, clamping and weighted blending helpers
- trait_prior    – personality-based skill priors
- task_stats     – per-category completion / difficulty / speed signals
- skill_blender  – blended skill scores and confidence
- load           – tiered and weighted workload strategies
- motivation     – motivation estimate
- danger         – attrition-risk scoring and ranking
- compatibility  – partner preferences
- explanations   – load / motivation reason reports
- reassignment   – task reassignment suggestions
- team_balance   – team load statistics
"""
