# File: utils/sql.py

DRUG_COLUMNS = """
    id, category_id, generic_name, syn_name, detail, drug_type,
    dosage_forms, ed_level, recommendations, conditions, warnings,
    notes, footnote, source_code
"""

# ── Read queries ────────────────────────────────────────────────
SEARCH_DRUGS_SQL = f"""
SELECT {DRUG_COLUMNS}
FROM drugs
WHERE generic_name ILIKE :pattern OR syn_name ILIKE :pattern
ORDER BY generic_name
LIMIT :limit
"""

GET_DRUG_BY_ID_SQL = f"""
SELECT {DRUG_COLUMNS}
FROM drugs
WHERE id = :id
"""

# ── Seeder writes ───────────────────────────────────────────────
CLEAR_DRUGS_SQL      = "DELETE FROM drugs"
CLEAR_CATEGORIES_SQL = "DELETE FROM drug_categories"

UPSERT_CATEGORY_SQL = """
INSERT INTO drug_categories (code, name, level, parent_id)
VALUES (:code, :name, :level, :parent_id)
ON CONFLICT (code) DO UPDATE SET name = EXCLUDED.name
RETURNING id
"""

INSERT_DRUG_SQL = """
INSERT INTO drugs (
    category_id, generic_name, syn_name, detail, drug_type, dosage_forms,
    ed_level, recommendations, conditions, warnings, notes, footnote, source_code
) VALUES (
    :category_id, :generic_name, :syn_name, :detail, :drug_type,
    :dosage_forms, :ed_level, :recommendations, :conditions,
    :warnings, :notes, :footnote, :source_code
)
RETURNING id
"""
