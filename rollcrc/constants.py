# CRC-32 parameters (ISO 3309 / IEEE 802.3, reflected)
CRC_POLY = 0xEDB88320
CRC_INIT = 0xFFFFFFFF   # register seed; also the output XOR
CRC_MASK = 0xFFFFFFFF

# CRC-32 of b"123456789"
CRC_CHECK = 0xCBF43926

TABLE_SIZE = 256
BYTE_MASK = 0xFF


# CLI defaults
DEFAULT_READ_SIZE = 65536  # 64 KiB
