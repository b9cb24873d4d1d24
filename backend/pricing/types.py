from django.db import models


class ShipmentMode(models.TextChoices):
    AIR = 'AIR', 'Air'
    SEA = 'SEA', 'Sea'


class TradeDirection(models.TextChoices):
    EXPORT = 'EXPORT', 'Export'
    IMPORT = 'IMPORT', 'Import'


class ChargeGroup(models.TextChoices):
    MAIN = 'MAIN', 'Main'
    EXWORKS = 'EXWORKS', 'Exworks'
    CLEARANCE = 'CLEARANCE', 'Clearance'
    IMPORT_CLEARANCE = 'IMPORT_CLEARANCE', 'Import clearance'
    EXPORT_CLEARANCE = 'EXPORT_CLEARANCE', 'Export clearance'
    TRANSFER_OWNERSHIP = 'TRANSFER_OWNERSHIP', 'Transfer of ownership'


class QtyBasis(models.TextChoices):
    SHIPMENT = 'SHIPMENT', 'Per shipment'
    KG_ACTUAL = 'KG_ACTUAL', 'Per kg (actual)'
    KG_CHARGEABLE_MAX = 'KG_CHARGEABLE_MAX', 'Per kg (chargeable)'
    PIECE = 'PIECE', 'Per piece'
    CONTAINER = 'CONTAINER', 'Per container'
    CBM = 'CBM', 'Per CBM'


class ContainerType(models.TextChoices):
    C20 = 'C20', "20' container"
    C40 = 'C40', "40' container"


class Currency(models.TextChoices):
    AED = 'AED', 'UAE Dirham'
    USD = 'USD', 'US Dollar'
    EUR = 'EUR', 'Euro'
    GBP = 'GBP', 'Pound Sterling'
    INR = 'INR', 'Indian Rupee'
    SAR = 'SAR', 'Saudi Riyal'


class TemplateCode(models.TextChoices):
    AIR_EXPORT_LOCAL = 'AIR_EXPORT_LOCAL'
    AIR_EXPORT_FREEZONE = 'AIR_EXPORT_FREEZONE'
    AIR_EXPORT_TRANSIT = 'AIR_EXPORT_TRANSIT'
    AIR_IMPORT_LOCAL_CLEARANCE = 'AIR_IMPORT_LOCAL_CLEARANCE'
    AIR_IMPORT_REEXPORT = 'AIR_IMPORT_REEXPORT'
    SEA_TO_AIR = 'SEA_TO_AIR'
    SEA_EXPORT_LOCAL = 'SEA_EXPORT_LOCAL'
    SEA_EXPORT_FREEZONE = 'SEA_EXPORT_FREEZONE'
    SEA_EXPORT_TRANSIT = 'SEA_EXPORT_TRANSIT'
    SEA_EXPORT_LCL = 'SEA_EXPORT_LCL'
    SEA_IMPORT_LOCAL = 'SEA_IMPORT_LOCAL'
    SEA_IMPORT_LCL = 'SEA_IMPORT_LCL'
    AIR_EXPORT_TRANSFER_OWNERSHIP = 'AIR_EXPORT_TRANSFER_OWNERSHIP'
    AIR_IMPORT_TRANSFER_OWNERSHIP = 'AIR_IMPORT_TRANSFER_OWNERSHIP'
    SEA_EXPORT_TRANSFER_OWNERSHIP = 'SEA_EXPORT_TRANSFER_OWNERSHIP'
    SEA_IMPORT_TRANSFER_OWNERSHIP = 'SEA_IMPORT_TRANSFER_OWNERSHIP'
