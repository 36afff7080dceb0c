# Output envelope tags
RDB_DATA = "RDB_DATA"
REQUEST_ERROR = "REQUEST_ERROR"
INVALID_LOG = "INVALID_LOG"

# Log severity levels (pino numbering)
LEVEL_INFO = 30
LEVEL_ERROR = 50

# Commands whose body is assembled into a DomainRecord
REPORT_COMMANDS = ("REISSUE_REPORT", "REALTIME_REPORT")
# Commands whose body is forwarded unmodified
PASSTHROUGH_COMMANDS = ("VEHICLE_LOGIN", "VEHICLE_LOGOUT", "HEARTBEAT")

TOPIC_VERSION = "telemlog/v1"
INPUT_TOPIC = "{root}/raw/#"
OUTPUT_TOPIC = "{root}/normalized/{kind}"

# Used for flags missing from ALARM_FLAGS
UNKNOWN_ALARM_CODE = -1

VEHICLE_FIELDS = (
    "status",
    "chargeStatus",
    "mode",
    "speed",
    "mileage",
    "voltage",
    "current",
    "soc",
    "dcStatus",
    "shift",
    "resistance",
    "aptv",
    "brake",
)

EXTREME_FIELDS = (
    "maxVoltageSubSysNo",
    "maxVoltageSingNo",
    "maxVoltage",
    "minVoltageSubSysNo",
    "minVoltageSingNo",
    "minVoltage",
    "maxNtcSubSysNo",
    "maxNtcNo",
    "maxNtc",
    "minNtcSubSysNo",
    "minNtcNo",
    "minNtc",
)

CUSTOM_EXT_FIELDS = (
    "pressure1",          # air pressure 1
    "pressure2",          # air pressure 2
    "batteryVoltage",     # 12V battery
    "dcov",               # DCDC output voltage
    "dcoc",               # DCDC output current
    "dcTemp",             # DCDC heatsink temperature
    "acTemp",             # DCAC heatsink temperature
    "lftp",               # left front tire pressure
    "lftt",               # left front tire temperature
    "rftp",
    "rftt",
    "lr1tp",              # left rear 1
    "lr1tt",
    "lr2tp",
    "lr2tt",
    "rr1tp",              # right rear 1
    "rr1tt",
    "rr2tp",
    "rr2tt",
    "cv",                 # charging voltage
    "rc",                 # charging current
    "cp",                 # charged energy
    "totalCharge",
    "totalDischarge",
    "instantPower",
    "bpiRes",             # battery positive insulation resistance
    "bniRes",             # battery negative insulation resistance
    "apTemp",             # air pump heatsink temperature
    "motorContTemp",
    "airMode",            # off / fan / heat / cool
    "airTemp",
    "insideTemp",
    "outsideTemp",
    "middleDoorStatus",   # closed / open / fault
    "frontDoorStatus",
    "handbrakeStatus",    # released / engaged / fault
    "keyStatus",
)

# General alarm flags (GB/T 32960 bit names) -> alarm code for level 1, 2, 3.
# Codes pack 0xFF (general alarm type) << 24 | bit << 8 | level.
ALARM_FLAGS = {
    "temperatureDifferential": (0xFF000001, 0xFF000002, 0xFF000003),
    "batteryHighTemperature": (0xFF000101, 0xFF000102, 0xFF000103),
    "energyStorageOvervoltage": (0xFF000201, 0xFF000202, 0xFF000203),
    "energyStorageUndervoltage": (0xFF000301, 0xFF000302, 0xFF000303),
    "socLow": (0xFF000401, 0xFF000402, 0xFF000403),
    "cellOvervoltage": (0xFF000501, 0xFF000502, 0xFF000503),
    "cellUndervoltage": (0xFF000601, 0xFF000602, 0xFF000603),
    "socHigh": (0xFF000701, 0xFF000702, 0xFF000703),
    "socJump": (0xFF000801, 0xFF000802, 0xFF000803),
    "energyStorageMismatch": (0xFF000901, 0xFF000902, 0xFF000903),
    "cellConsistency": (0xFF000A01, 0xFF000A02, 0xFF000A03),
    "insulation": (0xFF000B01, 0xFF000B02, 0xFF000B03),
    "dcdcTemperature": (0xFF000C01, 0xFF000C02, 0xFF000C03),
    "brakeSystem": (0xFF000D01, 0xFF000D02, 0xFF000D03),
    "dcdcStatus": (0xFF000E01, 0xFF000E02, 0xFF000E03),
    "motorControllerTemperature": (0xFF000F01, 0xFF000F02, 0xFF000F03),
    "highVoltageInterlock": (0xFF001001, 0xFF001002, 0xFF001003),
    "motorTemperature": (0xFF001101, 0xFF001102, 0xFF001103),
    "energyStorageOvercharge": (0xFF001201, 0xFF001202, 0xFF001203),
}
