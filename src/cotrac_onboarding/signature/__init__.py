from cotrac_onboarding.signature.pad import SignaturePad

__all__ = ["SignaturePad"]
