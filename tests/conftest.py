import pytest

from vigenere_tools.encoders import encrypt

PLAINTEXT = (
    "It was late in the evening when the old captain finally returned to the harbour. "
    "The wind had turned cold and the boats were tied close together along the stone wall. "
    "He walked slowly past the market, where the last of the traders were packing their "
    "baskets and talking about the weather and the price of fish. Nobody paid any attention "
    "to him, and that was exactly what he wanted. For three weeks he had been carrying a "
    "letter that he was not allowed to open, and the weight of it was beginning to trouble "
    "him more than the storm at sea. The letter was addressed to a man who lived at the end "
    "of the harbour road, in a narrow house with a green door and a broken window. The "
    "captain knocked twice, and when the door opened he handed over the letter without a "
    "word. The man read it by the light of a candle, then looked up and smiled for the "
    "first time in many years. It is over, he said. The war is over, and we can all go home."
)

KEY = "LEMON"


@pytest.fixture
def plaintext():
    return PLAINTEXT


@pytest.fixture
def lemon_ciphertext():
    return encrypt(PLAINTEXT, KEY)


@pytest.fixture
def dictionary_file(tmp_path):
    path = tmp_path / "frequency_dictionary.txt"
    path.write_text(
        "the 23135851162\n"
        "at 2272272772\n"
        "attack 49389008\n"
        "dawn 11442452\n"
        "war 98436022\n"
        "is 4705743816\n"
        "over 1263320627\n",
        encoding="utf-8",
    )
    return str(path)
