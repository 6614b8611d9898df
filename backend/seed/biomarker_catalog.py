BIOMARKERS = [
    {"type": "cholesterol_total", "name": "Total Cholesterol", "unit": "mg/dL", "aliases": ["CHOLESTEROL", "TOTAL CHOLESTEROL", "TC"]},
    {"type": "cholesterol_ldl", "name": "LDL Cholesterol", "unit": "mg/dL", "aliases": ["LDL", "LDL-C", "LDL CALCULATED", "LOW DENSITY LIPOPROTEIN"]},
    {"type": "cholesterol_hdl", "name": "HDL Cholesterol", "unit": "mg/dL", "aliases": ["HDL", "HDL-C", "HIGH DENSITY LIPOPROTEIN"]},
    {"type": "triglycerides", "name": "Triglycerides", "unit": "mg/dL", "aliases": ["TRIGLYCERIDES", "TG", "TRIGS"]},
    {"type": "glucose_fasting", "name": "Fasting Glucose", "unit": "mg/dL", "aliases": ["GLUCOSE", "FASTING GLUCOSE", "FBG", "FASTING BLOOD SUGAR"]},
    {"type": "hba1c", "name": "HbA1c", "unit": "%", "aliases": ["A1C", "HBA1C", "HEMOGLOBIN A1C", "GLYCATED HEMOGLOBIN"]},
    {"type": "creatinine", "name": "Creatinine", "unit": "mg/dL", "aliases": ["CREATININE", "CREAT", "SERUM CREATININE"]},
    {"type": "bp_systolic", "name": "Systolic Blood Pressure", "unit": "mmHg", "aliases": ["SYSTOLIC", "SBP", "SYSTOLIC BP"]},
    {"type": "bp_diastolic", "name": "Diastolic Blood Pressure", "unit": "mmHg", "aliases": ["DIASTOLIC", "DBP", "DIASTOLIC BP"]},
    {"type": "heart_rate", "name": "Heart Rate", "unit": "bpm", "aliases": ["HR", "PULSE", "HEART RATE", "PULSE RATE"]},
    {"type": "qtc_interval", "name": "QTc Interval", "unit": "ms", "aliases": ["QTC", "QTC INTERVAL", "CORRECTED QT"]},
]
