"""Catalog queries issued by SchemaReader.

All queries take a ``schemas`` parameter (list of schema names) and return
rows keyed by column alias.
"""

TABLES_QUERY = """
    SELECT table_schema AS schema,
           table_name AS name
      FROM information_schema.tables
     WHERE table_schema = ANY(%(schemas)s)
       AND table_type = 'BASE TABLE'
  ORDER BY table_schema, table_name
"""

COLUMNS_QUERY = """
    SELECT c.table_schema AS schema,
           c.table_name,
           c.column_name AS name,
           c.ordinal_position AS pos,
           c.column_default AS default,
           c.is_nullable AS null,
           c.is_identity,
           c.data_type AS type,
           c.udt_name AS custom_type_name,
           c.character_maximum_length AS char_length,
           c.numeric_precision AS num_precision,
           c.numeric_scale AS num_scale,
           c.datetime_precision AS dt_precision,
           c.interval_type,
           e.data_type AS element_type,
           e.udt_name AS element_custom_type_name
      FROM information_schema.columns AS c
 LEFT JOIN information_schema.element_types AS e
        ON e.object_catalog = c.table_catalog
       AND e.object_schema = c.table_schema
       AND e.object_name = c.table_name
       AND e.object_type = 'TABLE'
       AND e.collection_type_identifier = c.dtd_identifier
     WHERE c.table_schema = ANY(%(schemas)s)
  ORDER BY c.table_schema, c.table_name, c.ordinal_position
"""

INDEXES_QUERY = """
    SELECT table_rel.relname AS table_name,
           index_rel.relname AS name,
           pg_index.indkey::int2[] AS column_positions,
           pg_index.indoption::int2[] AS index_options,
           pg_index.indisprimary AS primary,
           pg_index.indisunique AS unique,
           pg_get_expr(pg_index.indpred, pg_index.indrelid, true) AS condition,
           pg_am.amname AS index_type,
           pg_index.indexrelid AS index_oid
      FROM pg_index
      JOIN pg_class AS index_rel
        ON index_rel.oid = pg_index.indexrelid
      JOIN pg_class AS table_rel
        ON table_rel.oid = pg_index.indrelid
      JOIN pg_namespace
        ON pg_namespace.oid = table_rel.relnamespace
      JOIN pg_am
        ON pg_am.oid = index_rel.relam
     WHERE pg_namespace.nspname = ANY(%(schemas)s)
       AND table_rel.relkind IN ('r', 'p')
  ORDER BY table_rel.relname, index_rel.relname
"""

# definitions[i] is the text of key column i + 1
EXPRESSION_INDEXES_QUERY = """
    SELECT index_id,
           array_agg(pg_get_indexdef(index_id, element, true) ORDER BY element) AS definitions
      FROM unnest(%(index_ids)s::oid[]) AS index_id,
           generate_series(1, %(max_position)s) AS element
  GROUP BY index_id
"""

CONSTRAINTS_QUERY = """
    SELECT table_rel.relname AS table_name,
           pg_constraint.conname AS name,
           pg_constraint.contype AS type,
           pg_get_expr(pg_constraint.conbin, pg_constraint.conrelid, true) AS condition,
           pg_constraint.conkey AS field_positions,
           pg_constraint.confkey AS key_positions,
           referenced_rel.relname AS referenced,
           pg_constraint.confupdtype AS on_update,
           pg_constraint.confdeltype AS on_delete,
           pg_constraint.condeferrable AS deferrable
      FROM pg_constraint
      JOIN pg_class AS table_rel
        ON table_rel.oid = pg_constraint.conrelid
      JOIN pg_namespace
        ON pg_namespace.oid = table_rel.relnamespace
 LEFT JOIN pg_class AS referenced_rel
        ON referenced_rel.oid = pg_constraint.confrelid
     WHERE pg_namespace.nspname = ANY(%(schemas)s)
       AND table_rel.relkind IN ('r', 'p')
       AND pg_constraint.contype IN ('c', 'f')
  ORDER BY table_rel.relname, pg_constraint.conname
"""

ENUMS_QUERY = """
    SELECT pg_namespace.nspname AS schema,
           pg_type.typname AS name,
           array_agg(pg_enum.enumlabel ORDER BY pg_enum.enumsortorder) AS values
      FROM pg_enum
      JOIN pg_type
        ON pg_type.oid = pg_enum.enumtypid
      JOIN pg_namespace
        ON pg_namespace.oid = pg_type.typnamespace
     WHERE pg_namespace.nspname = ANY(%(schemas)s)
  GROUP BY pg_type.oid, pg_namespace.nspname, pg_type.typname
  ORDER BY pg_type.typname, pg_namespace.nspname
"""

EXTENSIONS_QUERY = """
    SELECT extname AS name
      FROM pg_extension
     WHERE NOT (extname = ANY(%(excluded)s))
  ORDER BY extname
"""
