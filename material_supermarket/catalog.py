from .models.material import Material

# (ID SAP, descripción, cantidad por bin, bin1, bin2, bin3, bin4)
INITIAL_MATERIALS = [
    ("X/A013604BA", "Joint 3 ways", 8, 0, 0, 0, 0),
    ("X/G005294AB", "Cover joint 3 ways", 25, 0, 0, 0, 0),
    ("X/G005320AB", "Screw Ejot type G", 385, 385, 385, 0, 0),
    ("R04B40HEXM12035", "Baut m12x35 SS304", 25, 25, 0, 0, 0),
    ("R04WCTM12E", "Contact washer m12", 50, 0, 0, 0, 0),
    ("R04WCTM06E", "Contact washer m6", 500, 500, 500, 0, 0),
    ("R04B88HEXM06015E", "Bolt stell m6x15 ELG", 400, 202, 0, 0, 0),
    ("R04NUTCGM06E", "Cage nut M6", 200, 0, 0, 0, 0),
    ("X/Y377A3", "Screw ejot type Y", 500, 0, 0, 0, 0),
    ("R04BEYB12035", "Eye bolt m12", 25, 25, 25, 0, 0),
    ("2005372", "LABEL FOR BROTHER TZE-211 SZ 6MM WHITE", 3, 0, 0, 0, 0),
    ("2005373", "LABEL FOR BROTHER TZE-221 SZ 9MM WHITE", 3, 0, 0, 0, 0),
    ("2005369", "LABEL FOR BROTHER TZE-231 SZ 12MM WHITE", 3, 2, 3, 0, 0),
    ("2005395", "SCHOEN BLADE 1.25-18 RED", 375, 0, 0, 0, 0),
    ("2005397", "SCHOEN BLADE 2.5-18 BLUE", 250, 100, 250, 0, 0),
    ("2005406", "SCHOEN FERRULES 2-5 NON INSULATED", 500, 500, 500, 0, 0),
    ("2005436", "SCHOEN RING 2.5-10 NON INSULATED", 100, 100, 100, 100, 100),
    ("2005433", "SCHOEN RING 2.5-5 NON INSULATED", 750, 750, 750, 0, 0),
    ("2005412", "SCHOEN RING 2-4 NON INSULATED", 250, 0, 0, 0, 0),
    ("2005420", "SCHOEN RING 6-6 NON INSULATED", 125, 125, 125, 125, 0),
    ("2005477", "SCHOEN Y 1.25-3 NON INSULATED", 2000, 2000, 0, 0, 0),
    ("2005481", "SCHOEN Y 2.5-4 NON INSULATED", 500, 500, 500, 500, 500),
    ("2005505", "VINYL CABLE 2.5MM2 BK", 375, 375, 375, 375, 0),
    ("2005506", "VINYL CABLE 2.5MM2 BL", 375, 375, 375, 0, 0),
    ("2005507", "VINYL CABLE 2.5MM2 BR", 375, 375, 375, 375, 0),
    ("2005509", "VINYL CABLE 2.5MM2 GR", 375, 375, 375, 375, 375),
    ("2005547", "VINYL CABLE 6MM2 G", 250, 250, 250, 0, 0),
]


def seed_materials():
    """Copia nueva del catálogo inicial (cada app tiene su propio stock)."""
    return [Material(*row) for row in INITIAL_MATERIALS]
