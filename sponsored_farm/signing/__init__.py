# sponsored_farm/signing/__init__.py

from .voucher import (
    VoucherDomain,
    VoucherSigner,
    encode_voucher,
    harvest_typed_data,
    recover_voucher_signer,
    verify_voucher,
)
