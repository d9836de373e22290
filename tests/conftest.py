"""Fixture condivise : schemi XSD compatti, fogli di stile e fatture di esempio."""

from collections.abc import Callable

import pytest

from felkit.environment import Capabilities
from felkit.models.validation import ValidationResult
from felkit.renderers.base import BasePDFRenderer
from felkit.renderers.html import LxmlXSLTTransformer
from felkit.resources.memory import MemoryResourceStore
from felkit.validators.base import BaseSchemaValidator

NS_ORDINARIA = "http://ivaservizi.agenziaentrate.gov.it/docs/xsd/fatture/v1.2"
NS_SEMPLIFICATA = "http://ivaservizi.agenziaentrate.gov.it/docs/xsd/fatture/v1.0"

XMLDSIG_XSD = """\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns:ds="http://www.w3.org/2000/09/xmldsig#"
           targetNamespace="http://www.w3.org/2000/09/xmldsig#"
           elementFormDefault="qualified">
  <xs:element name="Signature" type="ds:SignatureType"/>
  <xs:complexType name="SignatureType">
    <xs:sequence>
      <xs:any namespace="##any" processContents="lax" minOccurs="0" maxOccurs="unbounded"/>
    </xs:sequence>
    <xs:attribute name="Id" type="xs:ID" use="optional"/>
  </xs:complexType>
</xs:schema>
"""

SEMPLIFICATA_XSD = f"""\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns="{NS_SEMPLIFICATA}"
           targetNamespace="{NS_SEMPLIFICATA}"
           version="1.0">
  <xs:element name="FatturaElettronicaSemplificata" type="FatturaElettronicaType"/>
  <xs:complexType name="FatturaElettronicaType">
    <xs:sequence>
      <xs:element name="FatturaElettronicaHeader" type="FatturaElettronicaHeaderType"/>
      <xs:element name="FatturaElettronicaBody" type="FatturaElettronicaBodyType"
                  maxOccurs="unbounded"/>
    </xs:sequence>
    <xs:attribute name="versione" type="FormatoTrasmissioneType" use="required"/>
  </xs:complexType>
  <xs:complexType name="FatturaElettronicaHeaderType">
    <xs:sequence>
      <xs:element name="DatiTrasmissione" type="DatiTrasmissioneType"/>
      <xs:element name="CedentePrestatore" type="SoggettoType"/>
      <xs:element name="CessionarioCommittente" type="SoggettoType"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="DatiTrasmissioneType">
    <xs:sequence>
      <xs:element name="ProgressivoInvio" type="xs:string"/>
      <xs:element name="FormatoTrasmissione" type="FormatoTrasmissioneType"/>
      <xs:element name="CodiceDestinatario" type="xs:string"/>
    </xs:sequence>
  </xs:complexType>
  <xs:simpleType name="FormatoTrasmissioneType">
    <xs:restriction base="xs:string">
      <xs:enumeration value="FSM10"/>
    </xs:restriction>
  </xs:simpleType>
  <xs:complexType name="SoggettoType">
    <xs:sequence>
      <xs:element name="Denominazione" type="xs:string"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="FatturaElettronicaBodyType">
    <xs:sequence>
      <xs:element name="DatiGenerali" type="DatiGeneraliType"/>
      <xs:element name="DatiBeniServizi" type="DatiBeniServiziType" maxOccurs="unbounded"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="DatiGeneraliType">
    <xs:sequence>
      <xs:element name="TipoDocumento" type="xs:string"/>
      <xs:element name="Divisa" type="xs:string"/>
      <xs:element name="Data" type="xs:date"/>
      <xs:element name="Numero" type="xs:string"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="DatiBeniServiziType">
    <xs:sequence>
      <xs:element name="Descrizione" type="xs:string"/>
      <xs:element name="Importo" type="xs:decimal"/>
    </xs:sequence>
  </xs:complexType>
</xs:schema>
"""

ORDINARIA_XSD = f"""\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns="{NS_ORDINARIA}"
           xmlns:ds="http://www.w3.org/2000/09/xmldsig#"
           targetNamespace="{NS_ORDINARIA}"
           version="1.2.2">
  <xs:import namespace="http://www.w3.org/2000/09/xmldsig#"
             schemaLocation="http://www.w3.org/TR/2002/REC-xmldsig-core-20020212/xmldsig-core-schema.xsd"/>
  <xs:element name="FatturaElettronica" type="FatturaElettronicaType"/>
  <xs:complexType name="FatturaElettronicaType">
    <xs:sequence>
      <xs:element name="FatturaElettronicaHeader" type="FatturaElettronicaHeaderType"/>
      <xs:element name="FatturaElettronicaBody" type="FatturaElettronicaBodyType"
                  maxOccurs="unbounded"/>
      <xs:element ref="ds:Signature" minOccurs="0"/>
    </xs:sequence>
    <xs:attribute name="versione" type="FormatoTrasmissioneType" use="required"/>
  </xs:complexType>
  <xs:complexType name="FatturaElettronicaHeaderType">
    <xs:sequence>
      <xs:element name="DatiTrasmissione" type="DatiTrasmissioneType"/>
      <xs:element name="CedentePrestatore" type="SoggettoType"/>
      <xs:element name="CessionarioCommittente" type="SoggettoType"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="DatiTrasmissioneType">
    <xs:sequence>
      <xs:element name="ProgressivoInvio" type="xs:string"/>
      <xs:element name="FormatoTrasmissione" type="FormatoTrasmissioneType"/>
      <xs:element name="CodiceDestinatario" type="xs:string"/>
    </xs:sequence>
  </xs:complexType>
  <xs:simpleType name="FormatoTrasmissioneType">
    <xs:restriction base="xs:string">
      <xs:enumeration value="FPA12"/>
      <xs:enumeration value="FPR12"/>
    </xs:restriction>
  </xs:simpleType>
  <xs:complexType name="SoggettoType">
    <xs:sequence>
      <xs:element name="Denominazione" type="xs:string"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="FatturaElettronicaBodyType">
    <xs:sequence>
      <xs:element name="DatiGenerali" type="DatiGeneraliType"/>
      <xs:element name="DatiBeniServizi" type="DatiBeniServiziType"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="DatiGeneraliType">
    <xs:sequence>
      <xs:element name="DatiGeneraliDocumento" type="DatiGeneraliDocumentoType"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="DatiGeneraliDocumentoType">
    <xs:sequence>
      <xs:element name="TipoDocumento" type="xs:string"/>
      <xs:element name="Divisa" type="xs:string"/>
      <xs:element name="Data" type="xs:date"/>
      <xs:element name="Numero" type="xs:string"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="DatiBeniServiziType">
    <xs:sequence>
      <xs:element name="DettaglioLinee" type="DettaglioLineeType" maxOccurs="unbounded"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="DettaglioLineeType">
    <xs:sequence>
      <xs:element name="NumeroLinea" type="xs:positiveInteger"/>
      <xs:element name="Descrizione" type="xs:string"/>
      <xs:element name="PrezzoTotale" type="xs:decimal"/>
    </xs:sequence>
  </xs:complexType>
</xs:schema>
"""

# Schema permissivo : accetta qualsiasi FatturaElettronica v1.2
LAX_XSD = f"""\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema" targetNamespace="{NS_ORDINARIA}">
  <xs:element name="FatturaElettronica">
    <xs:complexType>
      <xs:sequence>
        <xs:any processContents="skip" minOccurs="0" maxOccurs="unbounded"/>
      </xs:sequence>
      <xs:anyAttribute processContents="skip"/>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""

SEMPLIFICATA_XML = f"""\
<?xml version="1.0" encoding="UTF-8"?>
<p:FatturaElettronicaSemplificata xmlns:p="{NS_SEMPLIFICATA}"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
    versione="FSM10"
    xsi:schemaLocation="{NS_SEMPLIFICATA} http://www.fatturapa.gov.it/export/fatturazione/sdi/fatturapa/v1.0/Schema_VFSM10.xsd">
  <FatturaElettronicaHeader>
    <DatiTrasmissione>
      <ProgressivoInvio>00001</ProgressivoInvio>
      <FormatoTrasmissione>FSM10</FormatoTrasmissione>
      <CodiceDestinatario>0000000</CodiceDestinatario>
    </DatiTrasmissione>
    <CedentePrestatore>
      <Denominazione>Caffè Roma S.r.l.</Denominazione>
    </CedentePrestatore>
    <CessionarioCommittente>
      <Denominazione>Mario Rossi</Denominazione>
    </CessionarioCommittente>
  </FatturaElettronicaHeader>
  <FatturaElettronicaBody>
    <DatiGenerali>
      <TipoDocumento>TD07</TipoDocumento>
      <Divisa>EUR</Divisa>
      <Data>2026-03-15</Data>
      <Numero>42</Numero>
    </DatiGenerali>
    <DatiBeniServizi>
      <Descrizione>Caffè espresso</Descrizione>
      <Importo>12.50</Importo>
    </DatiBeniServizi>
  </FatturaElettronicaBody>
</p:FatturaElettronicaSemplificata>
"""

ORDINARIA_XML = f"""\
<?xml version="1.0" encoding="UTF-8"?>
<p:FatturaElettronica versione="FPR12"
    xmlns:ds="http://www.w3.org/2000/09/xmldsig#"
    xmlns:p="{NS_ORDINARIA}">
  <FatturaElettronicaHeader>
    <DatiTrasmissione>
      <ProgressivoInvio>00042</ProgressivoInvio>
      <FormatoTrasmissione>FPR12</FormatoTrasmissione>
      <CodiceDestinatario>ABC1234</CodiceDestinatario>
    </DatiTrasmissione>
    <CedentePrestatore>
      <Denominazione>Officina Bianchi S.p.A.</Denominazione>
    </CedentePrestatore>
    <CessionarioCommittente>
      <Denominazione>Trasporti Verdi S.r.l.</Denominazione>
    </CessionarioCommittente>
  </FatturaElettronicaHeader>
  <FatturaElettronicaBody>
    <DatiGenerali>
      <DatiGeneraliDocumento>
        <TipoDocumento>TD01</TipoDocumento>
        <Divisa>EUR</Divisa>
        <Data>2026-09-30</Data>
        <Numero>FPR-7</Numero>
      </DatiGeneraliDocumento>
    </DatiGenerali>
    <DatiBeniServizi>
      <DettaglioLinee>
        <NumeroLinea>1</NumeroLinea>
        <Descrizione>Tagliando completo</Descrizione>
        <PrezzoTotale>250.00</PrezzoTotale>
      </DettaglioLinee>
      <DettaglioLinee>
        <NumeroLinea>2</NumeroLinea>
        <Descrizione>Sostituzione pneumatici</Descrizione>
        <PrezzoTotale>480.00</PrezzoTotale>
      </DettaglioLinee>
    </DatiBeniServizi>
  </FatturaElettronicaBody>
</p:FatturaElettronica>
"""

ORDINARIA_XSL = """\
<?xml version="1.0" encoding="UTF-8"?>
<xsl:stylesheet version="1.1" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
  <xsl:output method="html" encoding="UTF-8"/>
  <xsl:template match="/">
    <html>
      <body>
        <h1>Fattura ordinaria n. <xsl:value-of select="//DatiGeneraliDocumento/Numero"/></h1>
        <p class="cedente"><xsl:value-of select="//CedentePrestatore/Denominazione"/></p>
      </body>
    </html>
  </xsl:template>
</xsl:stylesheet>
"""

SEMPLIFICATA_XSL = """\
<?xml version="1.0" encoding="UTF-8"?>
<xsl:stylesheet version="1.1" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
  <xsl:output method="html" encoding="UTF-8"/>
  <xsl:template match="/">
    <html>
      <body>
        <h1>Fattura semplificata n. <xsl:value-of select="//DatiGenerali/Numero"/></h1>
      </body>
    </html>
  </xsl:template>
</xsl:stylesheet>
"""


def broken_invoice(versione: str | None, root: str = "FatturaElettronica") -> str:
    """Fattura ben formata ma non conforme ad alcuno schema."""
    attribute = f' versione="{versione}"' if versione is not None else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<p:{root} xmlns:p="{NS_ORDINARIA}"{attribute}>'
        "<FatturaElettronicaHeader/>"
        f"</p:{root}>"
    )


class RecordingValidator(BaseSchemaValidator):
    """Validatore finto : esiti predefiniti per schema, chiamate registrate."""

    def __init__(
        self,
        results: dict[str, ValidationResult] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.results = results or {}
        self.error = error
        self.calls: list[str] = []

    async def validate(self, xml_text: str, schema_name: str) -> ValidationResult:
        self.calls.append(schema_name)
        if self.error is not None:
            raise self.error
        return self.results.get(schema_name, ValidationResult.failed(["non conforme"]))


class FakePDFRenderer(BasePDFRenderer):
    """Motore PDF finto che registra l'HTML ricevuto."""

    def __init__(self, output: bytes = b"%PDF-1.7 fake") -> None:
        self.output = output
        self.rendered: list[str] = []

    async def render(self, html: str) -> bytes:
        self.rendered.append(html)
        return self.output


@pytest.fixture
def semplificata_xml() -> str:
    return SEMPLIFICATA_XML


@pytest.fixture
def ordinaria_xml() -> str:
    return ORDINARIA_XML


@pytest.fixture
def make_broken_invoice() -> Callable[..., str]:
    return broken_invoice


@pytest.fixture
def ordinaria_xsd() -> str:
    return ORDINARIA_XSD


@pytest.fixture
def lax_xsd() -> str:
    return LAX_XSD


@pytest.fixture
def ordinaria_xsl() -> str:
    return ORDINARIA_XSL


@pytest.fixture
def store() -> MemoryResourceStore:
    """Resource store con schemi compatti, schema XMLDSig e fogli di stile."""
    return MemoryResourceStore(
        schemas={
            "FatturaOrdinaria.xsd": ORDINARIA_XSD,
            "FatturaSemplificata.xsd": SEMPLIFICATA_XSD,
            "xmldsig-core-schema.xsd": XMLDSIG_XSD,
        },
        stylesheets={
            "FatturaOrdinaria.xsl": ORDINARIA_XSL,
            "FatturaSemplificata.xsl": SEMPLIFICATA_XSL,
        },
    )


@pytest.fixture
def pdf_renderer() -> FakePDFRenderer:
    return FakePDFRenderer()


@pytest.fixture
def capabilities(store: MemoryResourceStore, pdf_renderer: FakePDFRenderer) -> Capabilities:
    """Capacità complete : lxml per XSD/XSLT, PDF finto."""
    return Capabilities.from_store(
        store,
        transformer=LxmlXSLTTransformer(),
        pdf_renderer=pdf_renderer,
    )


@pytest.fixture
def recording_validator() -> type[RecordingValidator]:
    return RecordingValidator
