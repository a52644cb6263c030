"""
Credential Transformer — Build the PEM user credential document with XSLT.

The stylesheet userCredential.xsl (looked up in the configured XSLT
directory) receives every value as a parameter; its input is a fixed dummy
document. The output is re-parsed into a standalone document so callers get a
tree that is independent of the transform.

Parameters passed to the stylesheet:
  configurationId   Id of the remote configuration the credentials belong to
  prodType/testType Credential types, "PROD" and "TEST"
  prodUsername      Remote username on the production side
  testUsername      Remote username on the test side
  passphrase        Always empty
"""

import os

from lxml import etree

from .settings import PROD, TEST, USER_CREDENTIAL_XSLT

_DUMMY_INPUT = b"<a>pem</a>"

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)

# Text input is already decoded; its encoding declaration is ignored
_TEXT_PARSER = etree.XMLParser(encoding="utf-8", resolve_entities=False, no_network=True)


def build_dom_doc(text: str) -> etree._ElementTree:
    """Parse an XML string into a document.

    Raises:
        lxml.etree.XMLSyntaxError: If the text is not well-formed XML.
    """
    return etree.ElementTree(etree.fromstring(text.encode("utf-8"), parser=_TEXT_PARSER))


class CredentialTransformer:
    """Applies userCredential.xsl to produce user credential documents."""

    def __init__(self, xslt_directory: str):
        self.xslt_path = os.path.abspath(os.path.join(xslt_directory, USER_CREDENTIAL_XSLT))
        self._transform = etree.XSLT(etree.parse(self.xslt_path))

    @classmethod
    def from_config(cls, config) -> "CredentialTransformer":
        return cls(config.xslt_directory)

    def transform(self, configuration_id: str, prod_username: str,
                  test_username: str) -> etree._ElementTree:
        """Return the credential document for one remote configuration."""
        result = self._transform(
            etree.fromstring(_DUMMY_INPUT),
            configurationId=etree.XSLT.strparam(configuration_id),
            prodType=etree.XSLT.strparam(PROD),
            testType=etree.XSLT.strparam(TEST),
            prodUsername=etree.XSLT.strparam(prod_username),
            testUsername=etree.XSLT.strparam(test_username),
            passphrase=etree.XSLT.strparam(""),
        )
        return etree.ElementTree(etree.fromstring(bytes(result), parser=_PARSER))
