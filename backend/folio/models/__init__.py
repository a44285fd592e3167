"""ORM Models — the three tables backing every versioned entity kind.

Tables:
    - entities: current version of each entity, keyed by (entity_type, id)
    - entity_versions: full version history for versioned kinds
    - index_rows: secondary-index entries grouped by (entity_type, row_name, part_key)
"""
