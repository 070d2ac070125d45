# Voucher Gateway Package
# Same-origin proxy for the voucher accounting API
