"""
Built-in ICHI dictionary entries.

This is an illustrative starter set, not the authoritative WHO tables.
Replace the list with the output of
``ichi-decoder export --format seed`` after loading the licensed ICHI CSV
files; the dictionary seeds itself from whatever is listed here.
"""

ICHI_SEED_ENTRIES = [
    {"code": "AAA.AA.ZZ", "description": "Assessment of mental functions, unspecified"},
    {"code": "AAB.AC.ZZ", "description": "Test of consciousness functions"},
    {"code": "BAA.AA.ZZ", "description": "Assessment of seeing functions"},
    {"code": "CAA.AA.ZZ", "description": "Assessment of hearing functions"},
    {"code": "DAA.AA.ZZ", "description": "Assessment of voice functions"},
    {"code": "EAA.AA.ZZ", "description": "Assessment of heart functions"},
    {"code": "KAA.AA.ZZ", "description": "Assessment of digestive functions"},
    {"code": "MAA.AA.ZZ", "description": "Assessment of mobility of joint functions"},
    {"code": "XA01", "description": "Laterality: left"},
    {"code": "XA02", "description": "Laterality: right"},
    {"code": "XA03", "description": "Laterality: bilateral"},
    {"code": "XB01", "description": "Approach: open"},
    {"code": "XB02", "description": "Approach: endoscopic"},
    {"code": "XC01", "description": "Setting: inpatient"},
    {"code": "XC02", "description": "Setting: outpatient"},
]
