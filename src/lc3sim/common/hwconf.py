WORD_BITS        = 16
WORD_MASK        = (1 << WORD_BITS) - 1
SIGN_BIT         = 1 << (WORD_BITS - 1)
WORD_SIZE        = 2                      # bytes per word in an object image

MEMORY_SIZE      = 1 << WORD_BITS         # 65536 words, addresses wrap
REGISTER_COUNT   = 8
LINK_REGISTER    = 7                      # JSR/JSRR return address

PROGRAM_START    = 0x3000                 # PC after reset, usual .ORIG

IN_PROMPT        = 'Enter a character: '
HALT_MESSAGE     = '\n--- halting the LC-3 ---\n'
